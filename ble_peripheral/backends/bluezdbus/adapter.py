# -*- coding: utf-8 -*-
"""
BlueZ adapter handle
--------------------

Finds the BlueZ adapter that is able to advertise and controls its power
state.
"""

import asyncio
import enum
import logging
from typing import Optional, cast

from dbus_next import Variant
from typing_extensions import Unpack

from ...args.bluez import BlueZAdapterArgs
from ...exc import AdapterNotFoundError, PropertyTypeError
from . import defs
from .connection import BlueZConnection
from .utils import unpack_variants

logger = logging.getLogger(__name__)


async def find_adapter(
    connection: BlueZConnection, timeout: float = defs.DISCOVERY_TIMEOUT
) -> str:
    """
    Finds the D-Bus object path of the adapter that implements the
    ``org.bluez.LEAdvertisingManager1`` interface.

    If more than one adapter qualifies, the first one in the order returned by
    ``GetManagedObjects`` is used.

    Args:
        connection: The shared D-Bus connection.
        timeout: Timeout in seconds for the ``GetManagedObjects`` call.

    Returns:
        The D-Bus object path of the adapter, e.g. ``/org/bluez/hci0``.

    Raises:
        AdapterNotFoundError: if no object implements the interface.
        BLEPeripheralDBusError: if the D-Bus call failed.
        asyncio.TimeoutError: if BlueZ did not reply in time.
    """
    managed_objects = await connection.get_managed_objects(timeout)

    for path, interfaces in managed_objects.items():
        if defs.LE_ADVERTISING_MANAGER_INTERFACE not in interfaces:
            continue

        if defs.ADAPTER_INTERFACE in interfaces:
            props = cast(
                defs.Adapter1, unpack_variants(interfaces[defs.ADAPTER_INTERFACE])
            )
            logger.debug(
                f"found adapter {path} (address={props.get('Address')}, powered={props.get('Powered')})"
            )
        else:
            logger.debug(f"found adapter {path}")

        return path

    raise AdapterNotFoundError(defs.LE_ADVERTISING_MANAGER_INTERFACE)


class PollState(enum.Enum):
    POLLING = "polling"
    DONE = "done"


class PowerPoller:
    """
    State machine that observes the ``Powered`` property of an adapter.

    Each call to :meth:`poll` reads the property exactly once while in the
    :attr:`PollState.POLLING` state. Once ``True`` has been read, the poller
    moves to :attr:`PollState.DONE` and no further reads are issued.

    Args:
        adapter: The adapter to observe.
    """

    def __init__(self, adapter: "BlueZAdapter"):
        self._adapter = adapter
        self.state = PollState.POLLING
        self.attempts = 0

    async def poll(self) -> bool:
        """
        Runs one polling step.

        Returns:
            ``True`` if the adapter is powered on.

        Raises:
            PropertyTypeError: if ``Powered`` is not a boolean.
            BLEPeripheralDBusError: if the read failed.
            asyncio.TimeoutError: if the read timed out.
        """
        if self.state is PollState.DONE:
            return True

        self.attempts += 1

        if await self._adapter.is_powered():
            self.state = PollState.DONE

        return self.state is PollState.DONE


class BlueZAdapter:
    """
    Handle to the BlueZ adapter object used for advertising.

    The object path is resolved once, either by :meth:`create` or by the
    caller, and is never looked up again. If the adapter is removed from the
    bus, later calls fail with the D-Bus error.

    Args:
        connection: The shared D-Bus connection.
        path: The D-Bus object path of the adapter.
        **kwargs: See :class:`ble_peripheral.args.bluez.BlueZAdapterArgs`.
    """

    def __init__(
        self,
        connection: BlueZConnection,
        path: str,
        **kwargs: Unpack[BlueZAdapterArgs],
    ):
        self._connection = connection
        self._path = path
        self._property_timeout = kwargs.get("property_timeout", defs.PROPERTY_TIMEOUT)
        self._poll_interval = kwargs.get("poll_interval", 0.0)

    @classmethod
    async def create(
        cls, connection: BlueZConnection, **kwargs: Unpack[BlueZAdapterArgs]
    ) -> "BlueZAdapter":
        """
        Finds the advertising capable adapter and returns a handle to it.

        Args:
            connection: The shared D-Bus connection.
            **kwargs: See :class:`ble_peripheral.args.bluez.BlueZAdapterArgs`.

        Raises:
            AdapterNotFoundError: if there is no adapter that can advertise.
        """
        path = await find_adapter(
            connection, kwargs.get("discovery_timeout", defs.DISCOVERY_TIMEOUT)
        )
        return cls(connection, path, **kwargs)

    @property
    def path(self) -> str:
        """The D-Bus object path of the adapter."""
        return self._path

    @property
    def connection(self) -> BlueZConnection:
        return self._connection

    async def set_powered(self, on: bool) -> None:
        """
        Writes the ``Powered`` property of the adapter.

        This returns as soon as BlueZ accepted the write, the radio may still
        be changing state. Use :meth:`wait_powered` to wait for it.

        Args:
            on: ``True`` to power on the adapter, ``False`` to power it off.
        """
        logger.debug(f"setting {self._path} Powered={on}")

        await self._connection.set_property(
            self._path,
            defs.ADAPTER_INTERFACE,
            "Powered",
            Variant("b", on),
            self._property_timeout,
        )

    async def is_powered(self) -> bool:
        """
        Reads the ``Powered`` property of the adapter.

        Raises:
            PropertyTypeError: if the property is not a boolean.
        """
        value = await self._connection.get_property(
            self._path, defs.ADAPTER_INTERFACE, "Powered", self._property_timeout
        )

        if value.signature != "b":
            raise PropertyTypeError("Powered", "b", value.signature)

        return value.value

    async def wait_powered(self, poll_interval: Optional[float] = None) -> None:
        """
        Waits until the ``Powered`` property of the adapter reads ``True``.

        The property is read once per event loop iteration, there is no
        limit on the number of reads. Wrap the call in
        :func:`asyncio.wait_for` or cancel the task to give up waiting;
        cancelling never changes the state of the adapter.

        Args:
            poll_interval:
                Delay in seconds between reads. Defaults to the
                ``poll_interval`` given to the constructor.

        Raises:
            PropertyTypeError: if the property is not a boolean.
            BLEPeripheralDBusError: if a read failed.
            asyncio.TimeoutError: if a single read timed out.
        """
        if poll_interval is None:
            poll_interval = self._poll_interval

        poller = PowerPoller(self)

        while not await poller.poll():
            await asyncio.sleep(poll_interval)

        logger.debug(f"{self._path} powered after {poller.attempts} read(s)")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"
