"""Event model for controller discovery.

Every stage of a registration pass records one kind of event:

- ``ControllersScanned``: the directory walk finished.
- ``ControllerLoaded``: one module was imported and its controller chosen.
- ``RouteEmitted``: one route descriptor was built.
- ``ScopeRegistered``: a scope's routes were handed to the host router.
- ``RegistrationFailed``: the pass aborted.

All events are frozen dataclasses with a ``timestamp_ns`` field.

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ControllersScanned:
    """The controllers directory was walked.

    Attributes:
        root: Absolute controllers root.
        count: Number of controller modules found.
        duration_ms: Time spent scanning in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    root: str
    count: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ControllerLoaded:
    """A controller module was imported.

    Attributes:
        source: Path of the module file.
        controller: Name of the selected controller class.
        route: Route path derived from the file location.
        scope: Scope the controller declared.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    controller: str
    route: str
    scope: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteEmitted:
    """A route descriptor was built.

    Attributes:
        url: Route pattern.
        methods: Verbs the route serves.
        scope: Scope the route belongs to.
        source: Path of the controller module.
        specialized: True if the schema was narrowed to a single method.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    url: str
    methods: tuple[str, ...]
    scope: str
    source: str
    specialized: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ScopeRegistered:
    """A scope's routes were registered on the host router."""

    scope: str
    route_count: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RegistrationFailed:
    """A registration pass aborted.

    Attributes:
        error: Exception class name.
        message: Exception message.
        source: Controller module involved, when known.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    error: str
    message: str
    source: str | None
    timestamp_ns: int


type DiscoveryEvent = (
    ControllersScanned
    | ControllerLoaded
    | RouteEmitted
    | ScopeRegistered
    | RegistrationFailed
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
