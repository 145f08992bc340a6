#!/usr/bin/env python

"""Tests for the `ble-peripheral-power` command line tool."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from dbus_next.constants import MessageType
from dbus_next.errors import AuthError
from dbus_next.message import Message
from dbus_next.signature import Variant

import ble_peripheral
from ble_peripheral.backends.bluezdbus.connection import BlueZConnection
from ble_peripheral.backends.bluezdbus.defs import LE_ADVERTISING_MANAGER_INTERFACE
from ble_peripheral.exc import AdapterNotFoundError


def method_return(signature="", body=None):
    return Message(
        message_type=MessageType.METHOD_RETURN,
        reply_serial=1,
        signature=signature,
        body=body or [],
    )


@pytest.fixture
def bus(monkeypatch):
    bus = Mock(connected=True, unique_name=":1.42", call=AsyncMock())
    monkeypatch.setattr(ble_peripheral, "BlueZConnection", lambda: BlueZConnection(bus))
    return bus


@pytest.mark.asyncio
async def test_power_on_and_wait(bus):
    bus.call.side_effect = [
        method_return(
            "a{oa{sa{sv}}}",
            [
                {
                    "/org/bluez/hci0": {LE_ADVERTISING_MANAGER_INTERFACE: {}},
                    "/org/bluez/hci0/dev": {},
                }
            ],
        ),
        method_return(),
        method_return("v", [Variant("b", False)]),
        method_return("v", [Variant("b", False)]),
        method_return("v", [Variant("b", True)]),
    ]

    assert await ble_peripheral._power(True, True, 1.0) == "/org/bluez/hci0"

    members = [call.args[0].member for call in bus.call.call_args_list]
    assert members == ["GetManagedObjects", "Set", "Get", "Get", "Get"]
    bus.disconnect.assert_called_once()


@pytest.mark.asyncio
async def test_power_off_does_not_wait(bus):
    bus.call.side_effect = [
        method_return(
            "a{oa{sa{sv}}}", [{"/org/bluez/hci0": {LE_ADVERTISING_MANAGER_INTERFACE: {}}}]
        ),
        method_return(),
    ]

    assert await ble_peripheral._power(False, True, 1.0) == "/org/bluez/hci0"
    assert bus.call.await_count == 2


@pytest.mark.asyncio
async def test_power_wait_timeout(bus):
    replies = [
        method_return(
            "a{oa{sa{sv}}}", [{"/org/bluez/hci0": {LE_ADVERTISING_MANAGER_INTERFACE: {}}}]
        ),
        method_return(),
    ]

    async def reply(message):
        if replies:
            return replies.pop(0)
        await asyncio.sleep(0.01)
        return method_return("v", [Variant("b", False)])

    bus.call.side_effect = reply

    with pytest.raises(asyncio.TimeoutError):
        await ble_peripheral._power(True, True, 0.05)

    bus.disconnect.assert_called_once()


def test_cli(monkeypatch, capsys):
    power = AsyncMock(return_value="/org/bluez/hci0")
    monkeypatch.setattr(ble_peripheral, "_power", power)
    monkeypatch.setattr("sys.argv", ["ble-peripheral-power", "on", "--wait", "-t", "3"])

    ble_peripheral.cli()

    power.assert_awaited_once_with(True, True, 3.0)
    assert capsys.readouterr().out == "/org/bluez/hci0\n"


def test_cli_adapter_not_found(monkeypatch, capsys):
    monkeypatch.setattr(
        ble_peripheral,
        "_power",
        AsyncMock(side_effect=AdapterNotFoundError(LE_ADVERTISING_MANAGER_INTERFACE)),
    )
    monkeypatch.setattr("sys.argv", ["ble-peripheral-power", "off"])

    with pytest.raises(SystemExit) as exc_info:
        ble_peripheral.cli()

    assert exc_info.value.code == 1
    assert "no adapter with interface" in capsys.readouterr().err


def test_cli_timeout(monkeypatch, capsys):
    monkeypatch.setattr(
        ble_peripheral, "_power", AsyncMock(side_effect=asyncio.TimeoutError)
    )
    monkeypatch.setattr("sys.argv", ["ble-peripheral-power", "on", "-w"])

    with pytest.raises(SystemExit) as exc_info:
        ble_peripheral.cli()

    assert exc_info.value.code == 1
    assert "timed out" in capsys.readouterr().err


@pytest.mark.parametrize(
    "error",
    [
        FileNotFoundError(2, "No such file or directory"),
        ConnectionRefusedError(111, "Connection refused"),
        AuthError("authentication failed: REJECTED: ['EXTERNAL']"),
    ],
)
def test_cli_bus_unavailable(monkeypatch, capsys, error):
    """Test a missing or refusing system bus exits with an error message."""
    monkeypatch.setattr(ble_peripheral, "_power", AsyncMock(side_effect=error))
    monkeypatch.setattr("sys.argv", ["ble-peripheral-power", "on"])

    with pytest.raises(SystemExit) as exc_info:
        ble_peripheral.cli()

    assert exc_info.value.code == 1
    assert capsys.readouterr().err == f"error: {error}\n"
