"""Discovery event log.

Keeps the most recent discovery events of one or more registration passes
and answers the questions asked after a pass: which routes were emitted for
a scope, which controller module a route came from, and why the last pass
failed.  The log is bounded; the oldest events fall off first.

Thread Safety:
    Reads and writes take a ``threading.Lock``, so a collector shared by
    several apps can be inspected while another pass is recording.

"""

import threading
from collections import deque
from typing import Any

from prowl.observability.events import DiscoveryEvent, RegistrationFailed, RouteEmitted


class EventLog:
    """Bounded store of discovery events.

    Args:
        max_events: How many events to keep before dropping the oldest.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[DiscoveryEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: DiscoveryEvent) -> None:
        """Record one event."""
        with self._lock:
            self._events.append(event)

    def _snapshot(self) -> list[DiscoveryEvent]:
        with self._lock:
            return list(self._events)

    def query(
        self,
        *,
        event_type: type | None = None,
        scope: str | None = None,
        source: str | None = None,
        limit: int = 100,
    ) -> list[DiscoveryEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only instances of this event class.
            scope: Keep only events recorded for this scope; events without
                a scope (scans, failures) never match.
            source: Keep only events whose controller source path contains
                this substring.
            limit: Stop after this many matches.

        """
        matches: list[DiscoveryEvent] = []
        for event in reversed(self._snapshot()):
            if len(matches) >= limit:
                break
            if _matches(event, event_type, scope, source):
                matches.append(event)
        return matches

    def routes(self, scope: str | None = None) -> list[RouteEmitted]:
        """Emitted routes in emission order, optionally for one scope."""
        return [
            event
            for event in self._snapshot()
            if isinstance(event, RouteEmitted) and (scope is None or event.scope == scope)
        ]

    def last_failure(self) -> RegistrationFailed | None:
        """The most recent aborted pass, if any."""
        for event in reversed(self._snapshot()):
            if isinstance(event, RegistrationFailed):
                return event
        return None

    def recent(self, n: int = 20) -> list[DiscoveryEvent]:
        """The *n* newest events, oldest first."""
        return self._snapshot()[-n:]

    def clear(self) -> int:
        """Drop every event; returns how many were dropped."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Event counts per event class and route counts per scope."""
        by_type: dict[str, int] = {}
        routes_by_scope: dict[str, int] = {}
        events = self._snapshot()
        for event in events:
            name = type(event).__name__
            by_type[name] = by_type.get(name, 0) + 1
            if isinstance(event, RouteEmitted):
                routes_by_scope[event.scope] = routes_by_scope.get(event.scope, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": by_type,
            "routes_by_scope": routes_by_scope,
        }


def _matches(
    event: DiscoveryEvent,
    event_type: type | None,
    scope: str | None,
    source: str | None,
) -> bool:
    if event_type is not None and not isinstance(event, event_type):
        return False
    if scope is not None and getattr(event, "scope", None) != scope:
        return False
    return source is None or source in (getattr(event, "source", None) or "")
