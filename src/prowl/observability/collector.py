"""Discovery collector — typed recording API over the event log.

The registration pipeline calls one ``record_*`` method per stage; callers
read the results back through ``collector.log``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prowl.observability.events import (
    ControllerLoaded,
    ControllersScanned,
    RegistrationFailed,
    RouteEmitted,
    ScopeRegistered,
    now_ns,
)
from prowl.observability.log import EventLog

if TYPE_CHECKING:
    from prowl.routes.emitter import RouteDescriptor
    from prowl.routes.loader import ControllerModule


class DiscoveryCollector:
    """Records discovery events into an ``EventLog``.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_scan(self, root: str, count: int, duration_ms: float) -> None:
        """Record a finished directory walk."""
        self._log.append(
            ControllersScanned(
                root=root,
                count=count,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_load(self, module: ControllerModule) -> None:
        """Record a loaded controller module."""
        self._log.append(
            ControllerLoaded(
                source=str(module.source),
                controller=module.controller.__name__,
                route=module.route,
                scope=module.scope,
                timestamp_ns=now_ns(),
            )
        )

    def record_route(self, descriptor: RouteDescriptor) -> None:
        """Record an emitted route descriptor."""
        self._log.append(
            RouteEmitted(
                url=descriptor.url,
                methods=tuple(str(m) for m in descriptor.methods),
                scope=descriptor.scope,
                source=str(descriptor.source),
                specialized=descriptor.schema is not None,
                timestamp_ns=now_ns(),
            )
        )

    def record_scope(self, scope: str, route_count: int) -> None:
        """Record a scope handed to the host router."""
        self._log.append(
            ScopeRegistered(scope=scope, route_count=route_count, timestamp_ns=now_ns())
        )

    def record_failure(self, exc: BaseException) -> None:
        """Record an aborted registration pass."""
        source = getattr(exc, "source", None)
        self._log.append(
            RegistrationFailed(
                error=type(exc).__name__,
                message=str(exc),
                source=str(source) if source is not None else None,
                timestamp_ns=now_ns(),
            )
        )
