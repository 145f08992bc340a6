# -*- coding: utf-8 -*-
from typing import Optional


class BLEPeripheralError(Exception):
    """Base Exception for ble-peripheral."""

    pass


class BLEPeripheralDBusError(BLEPeripheralError):
    """Specialized exception type for D-Bus error replies."""

    def __init__(self, dbus_error: str, error_body: list):
        """
        Args:
            dbus_error (str): The D-Bus error, e.g. ``org.bluez.Error.Failed``.
            error_body (list): Body of the D-Bus error, sometimes containing error description or details.
        """
        super().__init__(dbus_error, *error_body)

    @property
    def dbus_error(self) -> str:
        """Gets the D-Bus error name, e.g. ``org.freedesktop.DBus.Error.UnknownObject``."""
        return self.args[0]

    @property
    def dbus_error_details(self) -> Optional[str]:
        """Gets the optional D-Bus error details, e.g. 'Invalid UUID'."""
        if len(self.args) > 1:
            details = self.args[1]
            description = BLUEZ_ADAPTER_ERRORS.get(self.dbus_error)
            if description and description not in details:
                return f"{details} ({description})"
            return details
        return BLUEZ_ADAPTER_ERRORS.get(self.dbus_error)

    def __str__(self) -> str:
        name = f"[{self.dbus_error}]"
        details = self.dbus_error_details
        return (name + " " + details) if details else name


class AdapterNotFoundError(BLEPeripheralError):
    """
    Exception which is raised if no adapter providing the required interface
    is registered with BlueZ.
    """

    def __init__(self, interface: str):
        """
        Args:
            interface (str): The D-Bus interface name that was searched for.
        """
        super().__init__(f"no adapter with interface {interface} was found")
        self.interface = interface


class PropertyTypeError(BLEPeripheralError):
    """
    Exception which is raised if a D-Bus property has a different type than
    the one documented by BlueZ.
    """

    def __init__(self, name: str, expected: str, actual: str):
        super().__init__(
            f"property {name} has signature '{actual}', expected '{expected}'"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


# https://github.com/bluez/bluez/blob/master/doc/org.bluez.Adapter.rst
BLUEZ_ADAPTER_ERRORS = {
    "org.bluez.Error.Busy": "Operation already in progress",
    "org.bluez.Error.Failed": "Operation failed",
    "org.bluez.Error.InProgress": "Operation already in progress",
    "org.bluez.Error.InvalidArguments": "Invalid arguments",
    "org.bluez.Error.NotAuthorized": "Operation not authorized",
    "org.bluez.Error.NotReady": "Adapter is not ready",
    "org.bluez.Error.NotSupported": "Operation not supported",
    "org.bluez.Error.Rejected": "Operation rejected",
    "org.freedesktop.DBus.Error.AccessDenied": "Access denied, is the user allowed to use Bluetooth?",
    "org.freedesktop.DBus.Error.NoReply": "No reply from bluetoothd",
    "org.freedesktop.DBus.Error.ServiceUnknown": "bluetoothd is not running",
    "org.freedesktop.DBus.Error.UnknownObject": "Adapter object no longer exists",
}
