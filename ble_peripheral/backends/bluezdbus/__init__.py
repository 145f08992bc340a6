"""BlueZ D-Bus backend."""

from .adapter import BlueZAdapter, PollState, PowerPoller, find_adapter
from .connection import BlueZConnection

__all__ = [
    "BlueZAdapter",
    "BlueZConnection",
    "PollState",
    "PowerPoller",
    "find_adapter",
]
