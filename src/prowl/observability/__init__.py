"""Discovery observability — one event per registration stage.

Quick Start:
    >>> from prowl.observability import DiscoveryCollector, EventLog
    >>> collector = DiscoveryCollector(EventLog())
    >>> # await register_controllers(router, root, collector=collector)
    >>> # collector.log.query(event_type=RouteEmitted)

"""

from prowl.observability.collector import DiscoveryCollector
from prowl.observability.events import (
    ControllerLoaded,
    ControllersScanned,
    DiscoveryEvent,
    RegistrationFailed,
    RouteEmitted,
    ScopeRegistered,
    now_ns,
)
from prowl.observability.log import EventLog

__all__ = [
    "ControllerLoaded",
    "ControllersScanned",
    "DiscoveryCollector",
    "DiscoveryEvent",
    "EventLog",
    "RegistrationFailed",
    "RouteEmitted",
    "ScopeRegistered",
    "now_ns",
]
