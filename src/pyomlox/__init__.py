"""pyomlox - Async Python client and intrusion monitor for the OMLOX Hub API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyomlox")
except PackageNotFoundError:
    __version__ = "0+local"
from pyomlox.client import OmloxClient
from pyomlox.config import OmloxConfig
from pyomlox.exceptions import (
    InvalidStateError,
    OmloxApiError,
    OmloxAuthenticationError,
    OmloxConfigError,
    OmloxError,
    OmloxForbiddenError,
    OmloxNotFoundError,
    OmloxTransportError,
)
from pyomlox.models import (
    Fence,
    FenceEvent,
    Location,
    LocationProvider,
    Point,
    Polygon,
    Trackable,
    TrackableMotion,
    Zone,
)
from pyomlox.monitor import (
    AlarmEvent,
    AlarmStatus,
    IntrusionMonitor,
    IntrusionTransition,
    MonitorState,
    SelectionRegistry,
    TransitionKind,
)

__all__ = [
    "__version__",
    "AlarmEvent",
    "AlarmStatus",
    "Fence",
    "FenceEvent",
    "IntrusionMonitor",
    "IntrusionTransition",
    "InvalidStateError",
    "Location",
    "LocationProvider",
    "MonitorState",
    "OmloxApiError",
    "OmloxAuthenticationError",
    "OmloxClient",
    "OmloxConfig",
    "OmloxConfigError",
    "OmloxError",
    "OmloxForbiddenError",
    "OmloxNotFoundError",
    "OmloxTransportError",
    "Point",
    "Polygon",
    "SelectionRegistry",
    "Trackable",
    "TrackableMotion",
    "TransitionKind",
    "Zone",
]
