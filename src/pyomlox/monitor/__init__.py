"""Intrusion monitoring layer.

Tracks which watched trackables sit inside armed fences and derives a
single alarm flag from that state. Containment itself is answered by the
hub; this package never evaluates geometry.
"""

from pyomlox.monitor.events import (
    AlarmEvent,
    AlarmStatus,
    IntrusionTransition,
    MonitorEvent,
    MonitorState,
    TransitionKind,
)
from pyomlox.monitor.intrusion import ContainmentOracle, IntrusionMonitor, LocationSource
from pyomlox.monitor.registry import SelectionRegistry

__all__ = [
    "AlarmEvent",
    "AlarmStatus",
    "ContainmentOracle",
    "IntrusionMonitor",
    "IntrusionTransition",
    "LocationSource",
    "MonitorEvent",
    "MonitorState",
    "SelectionRegistry",
    "TransitionKind",
]
