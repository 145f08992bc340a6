"""
Power cycle
-----------

Example showing how to switch the advertising adapter off and on again and
wait until it is ready.

"""

import argparse
import asyncio
import logging

from ble_peripheral import BlueZAdapter, BlueZConnection


class Args(argparse.Namespace):
    timeout: float
    debug: bool


async def main(args: Args):
    async with BlueZConnection() as connection:
        adapter = await BlueZAdapter.create(connection, poll_interval=0.1)
        print(f"using {adapter.path}")

        await adapter.set_powered(False)
        await adapter.set_powered(True)

        try:
            await asyncio.wait_for(adapter.wait_powered(), args.timeout)
        except asyncio.TimeoutError:
            print(f"{adapter.path} did not power on within {args.timeout} seconds")
            return

        print(f"{adapter.path} is powered on")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()

    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="seconds to wait for the adapter to power on",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="sets the log level to debug",
    )

    args = parser.parse_args(namespace=Args())

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)-15s %(name)-8s %(levelname)s: %(message)s",
    )

    asyncio.run(main(args))
