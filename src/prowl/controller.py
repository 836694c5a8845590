"""Controller base classes.

A controller is a class whose methods are named after HTTP verbs::

    class Hello(Controller):
        schema = {"querystring": {"type": "object", "required": ["name"]}}

        async def get(self, request):
            return {"hi": request.query.get("name")}

        async def post(self, request):
            ...

Each instance inspects itself once, at construction, against the fixed verb
order in ``prowl.methods`` and records verb -> bound handler.  A ``handle``
method serves any verb without a dedicated handler.  A controller with
neither is rejected.

Class attributes:
    scope: Grouping label, read once at discovery (default ``"unsecured"``).
    schema: Optional four-facet schema bundle (see ``prowl.schema``).
    params: Optional path parameter spec (see ``prowl.params``).
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

from prowl._errors import (
    ControllerError,
    MethodHandlerNotDefinedError,
    MethodNotAllowedError,
)
from prowl.methods import HANDLE_NAME, HttpMethod
from prowl.params import check_param_shape
from prowl.schema import check_schema_shape

if TYPE_CHECKING:
    from prowl._types import Handler, ParamSpec, SchemaBundle


class Controller:
    """Base class for all discovered controllers.

    Args:
        context: The routing sub-context the controller is registered in.
        url: Route path derived from the controller's file location.

    Raises:
        MethodHandlerNotDefinedError: If no verb handler and no ``handle``
            method exists.
        SchemaError: If ``schema`` or ``params`` has the wrong shape.

    """

    scope: ClassVar[str] = "unsecured"

    schema: SchemaBundle | None = None
    params: ParamSpec | None = None

    def __init__(self, context: object, url: str) -> None:
        self._context = context
        self._url = url
        self._handlers = self._detect_handlers()
        self._methods: tuple[HttpMethod, ...] = tuple(self._handlers)

        if not self._methods and not callable(getattr(self, HANDLE_NAME, None)):
            raise MethodHandlerNotDefinedError(self.name)

        if self.schema is not None:
            check_schema_shape(self.schema, self.name)
        check_param_shape(self.params, self.name)

    def _detect_handlers(self) -> Mapping[HttpMethod, Handler]:
        handlers: dict[HttpMethod, Handler] = {}
        for method in HttpMethod:
            func = getattr(self, method.handler_name, None)
            if callable(func):
                handlers[method] = func
        return MappingProxyType(handlers)

    @property
    def name(self) -> str:
        """Class name, used in error messages and route names."""
        return type(self).__name__

    @property
    def url(self) -> str:
        """Route path assigned at construction."""
        return self._url

    @property
    def context(self) -> object:
        """The routing sub-context this instance was built against."""
        return self._context

    @property
    def methods(self) -> tuple[HttpMethod, ...]:
        """Verbs this instance answers, in detection order."""
        return self._methods

    @property
    def route_methods(self) -> tuple[HttpMethod, ...]:
        """Verbs to register: ``methods``, or every verb for a ``handle``-only controller."""
        return self._methods or tuple(HttpMethod)

    @property
    def handlers(self) -> Mapping[HttpMethod, Handler]:
        """Read-only verb -> handler record."""
        return self._handlers

    def narrow(self, method: HttpMethod) -> None:
        """Restrict this instance to a single verb.

        Raises:
            ValueError: If the controller does not answer *method*.

        """
        if method not in self.route_methods:
            msg = f"{self.name} does not handle {method}"
            raise ValueError(msg)
        self._methods = (method,)

    def _lookup(self, method: str) -> Handler:
        try:
            verb = HttpMethod.parse(method)
        except ValueError:
            verb = None

        if verb is not None and verb in self._handlers:
            return self._handlers[verb]

        # Fallback arm: the generic handler answers every other verb
        fallback = getattr(self, HANDLE_NAME, None)
        if callable(fallback):
            return fallback

        raise MethodNotAllowedError(method.upper(), self.name)

    async def handler(self, request: Any) -> Any:
        """Dispatch *request* to the handler for its HTTP method."""
        result = self._lookup(request.method)(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def pre_validation(self, request: Any) -> Any:
        """Run ``on_pre_validation`` if the controller defines one.

        Returns whatever the hook returns; a non-None value is a response
        that short-circuits the request.
        """
        hook = getattr(self, "on_pre_validation", None)
        if not callable(hook):
            return None
        result = hook(request)
        if inspect.isawaitable(result):
            result = await result
        return result


class SecureController(Controller):
    """Controller registered in the ``secured`` scope.

    Every request passes through ``authorize`` before validation.  The
    default denies everything; subclasses override ``authorize``.
    """

    scope: ClassVar[str] = "secured"

    async def authorize(self, request: Any) -> bool:
        """Return True if *request* may reach the handler."""
        return False

    async def on_pre_validation(self, request: Any) -> Any:
        allowed = self.authorize(request)
        if inspect.isawaitable(allowed):
            allowed = await allowed
        if not allowed:
            raise ControllerError("Unauthorized", status=401)
        return None
