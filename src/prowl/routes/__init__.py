"""Controller discovery and route emission.

Scans a controllers directory, imports each module, groups controllers by
scope and emits one route descriptor per controller (or per method, when a
schema needs specializing).

Public API::

    from prowl.routes import register_controllers
    from prowl.router import RouteTable

    table = RouteTable()
    await register_controllers(table, Path("/srv/app/controllers").resolve())
"""

from prowl.routes.emitter import (
    RouteDescriptor,
    ScopeContext,
    build_routes,
    emit_routes,
    register_controllers,
)
from prowl.routes.loader import (
    ControllerModule,
    FileModuleLoader,
    ModuleLoader,
    load_controllers,
)
from prowl.routes.scanner import derive_route_path, scan_controllers
from prowl.routes.scopes import classify_scopes

__all__ = [
    "ControllerModule",
    "FileModuleLoader",
    "ModuleLoader",
    "RouteDescriptor",
    "ScopeContext",
    "build_routes",
    "classify_scopes",
    "derive_route_path",
    "emit_routes",
    "load_controllers",
    "register_controllers",
    "scan_controllers",
]
