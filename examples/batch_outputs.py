"""Drive several pins at once and recover from a reset."""

import asyncio
import logging

from aiohttp import ClientSession

from pyteleduino import OutputState, TeleduinoClient, TeleduinoConfig, ValidationError


async def main() -> None:
    """Demonstrate batched outputs, validation and reset recovery."""
    logging.basicConfig(level=logging.INFO)

    config = TeleduinoConfig(request_timeout=10.0)

    async with ClientSession() as session:
        board = TeleduinoClient("your_api_key", config=config, session=session)

        # One request, sparse update of three pins
        response = await board.set_digital_outputs(
            [
                OutputState(pin=3, value=1, expire_time=1000),
                OutputState(pin=5, value=1, expire_time=2000),
                {"pin": 6, "value": 0, "expire": 0},
            ]
        )
        print(f"Batch write ok: {response.ok}")

        # Invalid entries reject the whole batch before anything is sent
        try:
            await board.set_digital_outputs(
                [
                    {"pin": 3, "value": 1, "expire": 1000},
                    {"pin": 25, "value": 0, "expire": 0},
                ]
            )
        except ValidationError as err:
            print(f"Rejected: {err}")

        # Reset and wait for the board to answer pings again
        response = await board.reset(callback=lambda r: print(f"Reset finished: {r.kind.value}"))
        if not response.ok:
            print(f"Board did not come back: {response.error}")


if __name__ == "__main__":
    asyncio.run(main())
