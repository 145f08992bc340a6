# -*- coding: utf-8 -*-

"""Top-level package for ble-peripheral."""

import asyncio
import logging
import os
import sys

from dbus_next.errors import AuthError, InvalidAddressError

from ble_peripheral.__version__ import __version__  # noqa: F401
from ble_peripheral._compat import async_timeout
from ble_peripheral.args.bluez import BlueZAdapterArgs
from ble_peripheral.backends.bluezdbus.adapter import (
    BlueZAdapter,
    PollState,
    PowerPoller,
    find_adapter,
)
from ble_peripheral.backends.bluezdbus.connection import BlueZConnection
from ble_peripheral.exc import (
    AdapterNotFoundError,
    BLEPeripheralDBusError,
    BLEPeripheralError,
    PropertyTypeError,
)

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
if bool(os.environ.get("BLE_PERIPHERAL_LOGGING", False)):
    FORMAT = "%(asctime)-15s %(name)-8s %(threadName)s %(levelname)s: %(message)s"
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FORMAT))
    _logger.addHandler(handler)
    _logger.setLevel(logging.DEBUG)


__all__ = [
    "AdapterNotFoundError",
    "BLEPeripheralDBusError",
    "BLEPeripheralError",
    "BlueZAdapter",
    "BlueZAdapterArgs",
    "BlueZConnection",
    "PollState",
    "PowerPoller",
    "PropertyTypeError",
    "cli",
    "find_adapter",
]


async def _power(on: bool, wait: bool, timeout: float) -> str:
    async with BlueZConnection() as connection:
        adapter = await BlueZAdapter.create(connection)
        await adapter.set_powered(on)

        if wait and on:
            async with async_timeout(timeout):
                await adapter.wait_powered()

        return adapter.path


def cli() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="Power the Bluetooth LE advertising adapter on or off"
    )
    parser.add_argument("state", choices=["on", "off"], help="New power state")
    parser.add_argument(
        "-w",
        "--wait",
        action="store_true",
        help="Wait until the adapter reports that it is powered on",
    )
    parser.add_argument(
        "-t",
        dest="timeout",
        type=float,
        default=10.0,
        help="Maximum time to wait for the adapter in seconds",
    )
    args = parser.parse_args()

    try:
        path = asyncio.run(_power(args.state == "on", args.wait, args.timeout))
    except asyncio.TimeoutError:
        parser.exit(1, "error: timed out waiting for the adapter\n")
    except (BLEPeripheralError, OSError, AuthError, InvalidAddressError) as e:
        parser.exit(1, f"error: {e}\n")

    print(path)


if __name__ == "__main__":
    cli()
