"""Controller loader — import discovered modules and pick their controller.

Each controller module is imported in isolation under a dotted name derived
from its location::

    controllers/v1/Hello.py  -> prowl_controllers.v1.Hello

A module names its controller explicitly with a module-level ``controller``
attribute, or defines exactly one ``Controller`` subclass::

    from prowl import Controller

    class Hello(Controller):
        async def get(self, request):
            return "hi"

Loading is asynchronous so that other loaders (remote, cached, lazy) fit the
same protocol.  ``load_controllers`` starts every load at once and fails with
the first error.
"""

from __future__ import annotations

import asyncio
import importlib.util
import inspect
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from prowl._errors import ControllerLoadError, DefinitionError
from prowl.controller import Controller
from prowl.routes.scanner import derive_route_path

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

# Package prefix for imported controller modules
_MODULE_PREFIX = "prowl_controllers"

# Module attribute that names the controller explicitly
_EXPLICIT_ATTR = "controller"


@dataclass(frozen=True, slots=True)
class ControllerModule:
    """A loaded controller class and its discovery metadata.

    Attributes:
        controller: The controller class.
        route: Route path derived from the file location.
        source: Filesystem path to the originating ``.py`` file.
        scope: The class's scope, captured at discovery time.

    """

    controller: type[Controller]
    route: str
    source: Path
    scope: str


class ModuleLoader(Protocol):
    """Turns a controller source path into a controller class."""

    async def load(self, path: Path, root: Path) -> type[Controller]: ...


class FileModuleLoader:
    """Import controller files with ``importlib`` without touching ``sys.path``."""

    async def load(self, path: Path, root: Path) -> type[Controller]:
        module = self._import(path, root)
        return _select_controller(module, path)

    def _import(self, path: Path, root: Path) -> ModuleType:
        relative = path.relative_to(root).with_suffix("")
        module_name = ".".join((_MODULE_PREFIX, *relative.parts))

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            msg = f"Cannot import controller module {path}"
            raise ControllerLoadError(path, msg)

        try:
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            msg = f"Failed to load controller module {path}: {exc}"
            raise ControllerLoadError(path, msg) from exc

        return module


def _select_controller(module: ModuleType, path: Path) -> type[Controller]:
    """Return the controller class a module provides.

    Raises:
        DefinitionError: If the module names a non-controller, or defines no
            controller, or defines several without naming one.

    """
    explicit = getattr(module, _EXPLICIT_ATTR, None)
    if explicit is not None:
        if inspect.isclass(explicit) and issubclass(explicit, Controller):
            return explicit
        msg = f"{path}: '{_EXPLICIT_ATTR}' must be a Controller subclass, got {explicit!r}"
        raise DefinitionError(msg)

    candidates = [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj)
        and issubclass(obj, Controller)
        and obj.__module__ == module.__name__
    ]

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        msg = f"{path} defines no Controller subclass"
        raise DefinitionError(msg)

    names = ", ".join(sorted(c.__name__ for c in candidates))
    msg = (
        f"{path} defines several controllers ({names}); "
        f"set '{_EXPLICIT_ATTR} = <class>' to choose one"
    )
    raise DefinitionError(msg)


async def load_controllers(
    paths: Iterable[Path],
    root: Path,
    loader: ModuleLoader | None = None,
) -> list[ControllerModule]:
    """Load every path concurrently and return modules in *paths* order."""
    loader = loader or FileModuleLoader()
    paths = list(paths)

    classes = await asyncio.gather(*(loader.load(path, root) for path in paths))

    return [
        ControllerModule(
            controller=cls,
            route=derive_route_path(path, root),
            source=path,
            scope=cls.scope,
        )
        for path, cls in zip(paths, classes, strict=True)
    ]
