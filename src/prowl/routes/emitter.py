"""Route emission — turn loaded controllers into route descriptors.

For every controller module:

- Without a schema, one descriptor carries the controller's whole method set.
- With a schema, every method gets its own freshly constructed controller,
  its own expanded URL and its own specialized schema, so nothing one
  method's descriptor holds is shared with another's.  Specialized request
  facets are checked as JSON Schema here, before anything is registered.

``register_controllers`` runs the full pipeline (scan, load, group, emit) and
only hands descriptors to the host router once every scope has been built,
so a failing module leaves the router untouched.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from prowl.methods import HttpMethod
from prowl.observability.collector import DiscoveryCollector
from prowl.params import expand_url
from prowl.routes.loader import ControllerModule, load_controllers
from prowl.routes.scanner import check_root, scan_controllers
from prowl.routes.scopes import classify_scopes
from prowl.schema import specialize_schema
from prowl.validation import check_request_schema

if TYPE_CHECKING:
    from pathlib import Path

    from prowl._types import Handler
    from prowl.controller import Controller
    from prowl.router import HostRouter, RouteContext
    from prowl.routes.loader import ModuleLoader


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A resolved route, ready for the host router.

    Attributes:
        url: Route pattern with ``:name`` parameter segments.
        methods: Verbs served; exactly one for specialized routes.
        handler: Bound dispatch coroutine of the controller instance.
        pre_validation: Bound pre-validation coroutine of the same instance.
        scope: Scope the route is registered under.
        name: Route name for URL generation and debugging.
        source: Filesystem path to the controller module.
        schema: Single-method schema bundle, or None.

    """

    url: str
    methods: tuple[HttpMethod, ...]
    handler: Handler
    pre_validation: Handler
    scope: str
    name: str
    source: Path
    schema: dict[str, Any] | None = None

    @property
    def method(self) -> HttpMethod:
        """The single verb of a specialized route.

        Raises:
            ValueError: If the descriptor serves several verbs.

        """
        if len(self.methods) != 1:
            msg = f"Route {self.name!r} serves {len(self.methods)} methods"
            raise ValueError(msg)
        return self.methods[0]


@dataclass(frozen=True, slots=True)
class ScopeContext:
    """Routing context controllers are constructed against.

    Attributes:
        scope: Scope name.
        router: Host router the scope will be registered on.

    """

    scope: str
    router: object


def _unspecialized_url(controller: Controller) -> str:
    # A per-method params mapping has no single expansion
    if isinstance(controller.params, Mapping):
        return controller.url
    return expand_url(controller.url, controller.params, HttpMethod.GET)


def _describe(
    controller: Controller,
    module: ControllerModule,
    *,
    url: str,
    name: str,
    schema: dict[str, Any] | None,
) -> RouteDescriptor:
    return RouteDescriptor(
        url=url,
        methods=controller.route_methods,
        handler=controller.handler,
        pre_validation=controller.pre_validation,
        scope=module.scope,
        name=name,
        source=module.source,
        schema=schema,
    )


def emit_routes(module: ControllerModule, context: object) -> list[RouteDescriptor]:
    """Build the route descriptors for one controller module.

    Raises:
        MethodHandlerNotDefinedError: If the controller has no handlers.
        SchemaError: If its schema or params have the wrong shape, or a
            specialized request facet is not a valid JSON Schema.

    """
    template = module.controller(context, module.route)
    base_name = "route:" + module.route

    if template.schema is None:
        url = _unspecialized_url(template)
        return [_describe(template, module, url=url, name=base_name, schema=None)]

    descriptors: list[RouteDescriptor] = []
    for method in template.route_methods:
        controller = module.controller(context, module.route)
        controller.narrow(method)

        url = expand_url(controller.url, controller.params, method)
        schema = specialize_schema(controller.schema, method)
        check_request_schema(schema, f"{controller.name}[{method}]")

        descriptors.append(_describe(
            controller, module, url=url, name=f"{base_name}:{method}", schema=schema,
        ))

    return descriptors


def build_routes(
    scoped: Mapping[str, list[ControllerModule]],
    router: object,
    collector: DiscoveryCollector | None = None,
) -> dict[str, list[RouteDescriptor]]:
    """Emit descriptors for every scope without registering anything."""
    plan: dict[str, list[RouteDescriptor]] = {}
    for scope, modules in scoped.items():
        context = ScopeContext(scope=scope, router=router)
        descriptors: list[RouteDescriptor] = []
        for module in modules:
            emitted = emit_routes(module, context)
            if collector is not None:
                for descriptor in emitted:
                    collector.record_route(descriptor)
            descriptors.extend(emitted)
        plan[scope] = descriptors
    return plan


def _commit(descriptors: list[RouteDescriptor]) -> Callable[[RouteContext], None]:
    def setup(context: RouteContext) -> None:
        for descriptor in descriptors:
            context.route(descriptor)

    return setup


async def register_controllers(
    router: HostRouter,
    root: Path | str,
    *,
    loader: ModuleLoader | None = None,
    collector: DiscoveryCollector | None = None,
) -> dict[str, list[RouteDescriptor]]:
    """Discover controllers under *root* and register their routes on *router*.

    Returns the registered descriptors grouped by scope.

    Raises:
        InvalidControllerPathError: If *root* is not an absolute directory.
        ControllerLoadError: If a controller module fails to import.
        DefinitionError: If a module or controller is defined incorrectly.

    """
    collector = collector if collector is not None else DiscoveryCollector()

    try:
        root_path = check_root(root)

        t0 = time.perf_counter()
        paths = list(scan_controllers(root_path))
        collector.record_scan(
            str(root_path), len(paths), (time.perf_counter() - t0) * 1000,
        )

        modules = await load_controllers(paths, root_path, loader)
        for module in modules:
            collector.record_load(module)

        plan = build_routes(classify_scopes(modules), router, collector)
    except Exception as exc:
        collector.record_failure(exc)
        raise

    for scope, descriptors in plan.items():
        router.register(_commit(descriptors), scope=scope)
        collector.record_scope(scope, len(descriptors))

    return plan
