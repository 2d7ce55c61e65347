"""Basic usage example for pyteleduino library."""

import asyncio

from pyteleduino import ResponseKind, TeleduinoClient


async def main() -> None:
    """Demonstrate basic usage of pyteleduino."""
    async with TeleduinoClient("your_api_key") as board:
        print("Connected to Teleduino proxy")

        ping = await board.ping()
        if not ping.ok:
            print(f"Board not reachable: {ping.error}")
            return

        print(f"Uptime: {(await board.get_uptime()).value} ms")
        print(f"Firmware: {(await board.get_version()).value}")
        print(f"Free memory: {(await board.get_free_memory()).value} bytes")

        # Blink pin 13 for half a second
        await board.set_digital_output(13, 1, 500)

        # Read analog pin 14
        response = await board.get_analog_input(14)
        match response.kind:
            case ResponseKind.VALUE:
                print(f"A0: {response.value}")
            case ResponseKind.ERROR:
                print(f"Read failed: {response.error}")

        inputs = await board.get_all_inputs()
        print(f"All inputs: {inputs.value}")


if __name__ == "__main__":
    asyncio.run(main())
