import pytest
from unittest.mock import AsyncMock, Mock

from ble_peripheral.backends.bluezdbus.connection import BlueZConnection


@pytest.fixture
def bus():
    """A connected message bus that never talks to a real D-Bus daemon.

    Tests set ``bus.call.side_effect`` or ``bus.call.return_value`` to the
    replies that ``bluetoothd`` would send.
    """
    return Mock(connected=True, unique_name=":1.42", call=AsyncMock())


@pytest.fixture
def connection(bus):
    return BlueZConnection(bus)
