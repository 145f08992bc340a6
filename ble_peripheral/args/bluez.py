"""
-----------------------
BlueZ backend arguments
-----------------------
"""

from typing_extensions import TypedDict


class BlueZAdapterArgs(TypedDict, total=False):
    """
    :class:`ble_peripheral.BlueZAdapter` keyword args.
    """

    discovery_timeout: float
    """
    Timeout in seconds for the ``GetManagedObjects`` call used to find the
    adapter. Defaults to 5 seconds.
    """
    property_timeout: float
    """
    Timeout in seconds for each ``Powered`` property read or write.
    Defaults to 1 second.
    """
    poll_interval: float
    """
    Delay in seconds between two reads of the ``Powered`` property while
    waiting for the adapter to power on.

    The default of 0 only yields to the event loop between reads.
    """
