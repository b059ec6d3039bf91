"""
Navigation Module - Black Box Interface

Purpose: Carry navigation intents emitted by session operations
Interface: navigate(path)
Hidden: Router integration
"""

from .navigation import (
    CallbackNavigator,
    Destination,
    NavigationSink,
    NullNavigator,
    RecordingNavigator,
)

__all__ = [
    "CallbackNavigator",
    "Destination",
    "NavigationSink",
    "NullNavigator",
    "RecordingNavigator",
]
