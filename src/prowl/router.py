"""Host routers — where route descriptors end up.

A host router exposes ``register(setup, scope=...)``: it creates a
sub-context for the scope and calls ``setup(context)``, which in turn calls
``context.route(descriptor)`` once per route.

Two implementations ship with prowl:

- ``RouteTable`` records descriptors in memory (route listing, tests).
- ``ChirpRouter`` registers them on a Chirp ``App``; each request runs the
  controller's pre-validation hook, then schema validation, then the handler
  with a ``ValidatedRequest`` carrying the coerced path params and query.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

from prowl._errors import ControllerError, RequestValidationError
from prowl.validation import RequestValidator

if TYPE_CHECKING:
    from chirp import App

    from prowl.routes.emitter import RouteDescriptor


class RouteContext(Protocol):
    """A scope's sub-context inside the host router."""

    def route(self, descriptor: RouteDescriptor) -> None: ...


class HostRouter(Protocol):
    """Accepts route descriptors grouped by scope."""

    def register(self, setup: Callable[[RouteContext], None], *, scope: str) -> None: ...


# ---------------------------------------------------------------------------
# In-memory router
# ---------------------------------------------------------------------------


class _TableScope:
    __slots__ = ("_routes", "scope")

    def __init__(self, scope: str, routes: list[RouteDescriptor]) -> None:
        self.scope = scope
        self._routes = routes

    def route(self, descriptor: RouteDescriptor) -> None:
        self._routes.append(descriptor)


class RouteTable:
    """Host router that only records what it is given."""

    __slots__ = ("_scopes",)

    def __init__(self) -> None:
        self._scopes: dict[str, list[RouteDescriptor]] = {}

    def register(self, setup: Callable[[RouteContext], None], *, scope: str) -> None:
        setup(_TableScope(scope, self._scopes.setdefault(scope, [])))

    @property
    def scopes(self) -> tuple[str, ...]:
        """Registered scope names, in registration order."""
        return tuple(self._scopes)

    @property
    def routes(self) -> tuple[RouteDescriptor, ...]:
        """Every recorded descriptor, scope by scope."""
        return tuple(d for routes in self._scopes.values() for d in routes)

    def for_scope(self, scope: str) -> tuple[RouteDescriptor, ...]:
        """Descriptors recorded for *scope*."""
        return tuple(self._scopes.get(scope, ()))

    def __len__(self) -> int:
        return sum(len(routes) for routes in self._scopes.values())


# ---------------------------------------------------------------------------
# Chirp adapter
# ---------------------------------------------------------------------------

_PARAM_SEGMENT = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def to_chirp_path(url: str) -> str:
    """Rewrite ``:name`` parameter segments to Chirp's ``{name}`` syntax."""
    return _PARAM_SEGMENT.sub(r"{\1}", url)


def _error_response(exc: ControllerError) -> Any:
    from chirp import Response

    payload: dict[str, Any] = {"error": str(exc)}
    if isinstance(exc, RequestValidationError):
        payload["facet"] = exc.facet
        payload["details"] = exc.errors
    return Response(
        body=json.dumps(payload),
        content_type="application/json",
        status=exc.status,
    )


class ValidatedRequest:
    """A request whose ``path_params`` and ``query`` hold validated values.

    Values declared as ``integer``, ``number`` or ``boolean`` arrive coerced;
    every other attribute is read from the wrapped request.
    """

    __slots__ = ("_request", "path_params", "query")

    def __init__(
        self,
        request: Any,
        *,
        path_params: Mapping[str, Any],
        query: Mapping[str, Any],
    ) -> None:
        self._request = request
        self.path_params = path_params
        self.query = query

    @property
    def request(self) -> Any:
        """The host's original request."""
        return self._request

    def __getattr__(self, name: str) -> Any:
        return getattr(self._request, name)


def make_endpoint(descriptor: RouteDescriptor) -> Callable[[Any], Any]:
    """Wrap a descriptor's handler with pre-validation and schema validation.

    The handler receives a ``ValidatedRequest``.
    """
    validator = RequestValidator(descriptor.schema, descriptor.name)

    async def endpoint(request: Any) -> Any:
        try:
            early = await descriptor.pre_validation(request)
            if early is not None:
                return early

            path_params = validator.validate_params(
                getattr(request, "path_params", None) or {},
            )
            query = validator.validate_querystring(request.query)
            if validator.expects_body:
                try:
                    body = await request.json()
                except ValueError as exc:
                    raise RequestValidationError(
                        "body", [{"message": f"is not valid JSON: {exc}", "path": "/"}],
                    ) from exc
                validator.validate_body(body)

            validated = ValidatedRequest(request, path_params=path_params, query=query)
            return await descriptor.handler(validated)
        except ControllerError as exc:
            return _error_response(exc)

    endpoint.__name__ = descriptor.name.replace(":", "_").replace("/", "_")
    return endpoint


class _ChirpScope:
    __slots__ = ("_app", "scope")

    def __init__(self, app: App, scope: str) -> None:
        self._app = app
        self.scope = scope

    def route(self, descriptor: RouteDescriptor) -> None:
        self._app.route(
            to_chirp_path(descriptor.url),
            methods=[str(m) for m in descriptor.methods],
            name=f"{self.scope}:{descriptor.name}",
        )(make_endpoint(descriptor))


class ChirpRouter:
    """Host router backed by a Chirp ``App``.

    Chirp has no nested sub-applications, so a scope's sub-context registers
    directly on the shared app; the scope is carried in each route's name.
    """

    __slots__ = ("_app",)

    def __init__(self, app: App) -> None:
        self._app = app

    @property
    def app(self) -> App:
        """The wrapped Chirp app."""
        return self._app

    def register(self, setup: Callable[[RouteContext], None], *, scope: str) -> None:
        setup(_ChirpScope(self._app, scope))
