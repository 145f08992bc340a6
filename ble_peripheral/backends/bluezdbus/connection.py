"""
BlueZ D-Bus connection module
-----------------------------

This module contains the connection to the D-Bus system bus that is shared by
all adapter handles. It only provides the small set of primitives needed to
talk to ``bluetoothd``: plain method calls, ``GetManagedObjects`` and property
get/set, each bounded by a timeout.
"""

import asyncio
import logging
from types import TracebackType
from typing import Dict, Optional, Type

from dbus_next import BusType, Message, Variant
from dbus_next.aio.message_bus import MessageBus

from ..._compat import async_timeout
from ...exc import BLEPeripheralError
from . import defs
from .utils import assert_reply

logger = logging.getLogger(__name__)


ManagedObjects = Dict[str, Dict[str, Dict[str, Variant]]]
"""
dict of object path: dict of interface name: dict of property name: property value
"""


class BlueZConnection:
    """
    Connection to the BlueZ service on the D-Bus system bus.

    A single connection may be shared by any number of
    :class:`~ble_peripheral.backends.bluezdbus.adapter.BlueZAdapter` objects.
    Calls may be outstanding concurrently, ordering of the replies is up to
    the message bus.

    Args:
        bus:
            An already connected message bus to use instead of creating a new
            system bus connection in :meth:`connect`.
    """

    def __init__(self, bus: Optional[MessageBus] = None):
        self._bus = bus
        self._bus_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._bus is not None and self._bus.connected

    async def connect(self) -> None:
        """
        Connects to the D-Bus system bus.

        It is safe to call this method multiple times. If the bus is already
        connected, no action is performed.
        """
        async with self._bus_lock:
            if self.connected:
                return

            # dbus-next destroys the underlying file descriptors of a closed
            # bus in its finalizer, so a new MessageBus is needed every time
            bus = MessageBus(bus_type=BusType.SYSTEM)
            await bus.connect()

            logger.debug(f"connected to system bus as {bus.unique_name}")

            self._bus = bus

    def disconnect(self) -> None:
        """
        Disconnects from the D-Bus system bus.

        Does nothing if not connected.
        """
        if self._bus is None:
            return

        if self._bus.connected:
            logger.debug("disconnecting from system bus")
            self._bus.disconnect()

        self._bus = None

    async def __aenter__(self) -> "BlueZConnection":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.disconnect()

    async def call(self, message: Message, timeout: float) -> Message:
        """
        Sends a method call and waits for the reply.

        Args:
            message: The method call message.
            timeout: Maximum time in seconds to wait for the reply.

        Returns:
            The method return message.

        Raises:
            BLEPeripheralError: if the bus is not connected.
            BLEPeripheralDBusError: if the reply is a D-Bus error.
            asyncio.TimeoutError: if no reply was received in time.
        """
        if not self.connected:
            raise BLEPeripheralError("not connected to the D-Bus system bus")

        async with async_timeout(timeout):
            reply = await self._bus.call(message)

        assert_reply(reply)

        return reply

    async def get_managed_objects(
        self, timeout: float = defs.DISCOVERY_TIMEOUT
    ) -> ManagedObjects:
        """
        Gets all objects, interfaces and properties registered by BlueZ.

        Args:
            timeout: Maximum time in seconds to wait for the reply.

        Returns:
            A dictionary of object path to interface name to property table.
        """
        reply = await self.call(
            Message(
                destination=defs.BLUEZ_SERVICE,
                path="/",
                member="GetManagedObjects",
                interface=defs.OBJECT_MANAGER_INTERFACE,
            ),
            timeout,
        )

        return reply.body[0]

    async def get_property(
        self,
        path: str,
        interface: str,
        name: str,
        timeout: float = defs.PROPERTY_TIMEOUT,
    ) -> Variant:
        """
        Reads a single D-Bus property.

        Args:
            path: The D-Bus object path.
            interface: The D-Bus interface that owns the property.
            name: The property name.
            timeout: Maximum time in seconds to wait for the reply.

        Returns:
            The property value, still wrapped in a :class:`dbus_next.Variant`
            so that the caller can check its signature.
        """
        reply = await self.call(
            Message(
                destination=defs.BLUEZ_SERVICE,
                path=path,
                interface=defs.PROPERTIES_INTERFACE,
                member="Get",
                signature="ss",
                body=[interface, name],
            ),
            timeout,
        )

        return reply.body[0]

    async def set_property(
        self,
        path: str,
        interface: str,
        name: str,
        value: Variant,
        timeout: float = defs.PROPERTY_TIMEOUT,
    ) -> None:
        """
        Writes a single D-Bus property.

        Args:
            path: The D-Bus object path.
            interface: The D-Bus interface that owns the property.
            name: The property name.
            value: The new value.
            timeout: Maximum time in seconds to wait for the reply.
        """
        await self.call(
            Message(
                destination=defs.BLUEZ_SERVICE,
                path=path,
                interface=defs.PROPERTIES_INTERFACE,
                member="Set",
                signature="ssv",
                body=[interface, name, value],
            ),
            timeout,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connected={self.connected})"
