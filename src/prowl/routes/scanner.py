"""Controller discovery — walk a directory tree for controller modules.

File layout maps to route paths:

    controllers/hello.py           -> /hello
    controllers/v1/Hello.py        -> /v1/hello
    controllers/v1/utils/index.py  -> /v1/utils
    controllers/index.py           -> /

Hidden directories (``.auth/``), ``__pycache__``, ``__init__.py`` and any
non-``.py`` file are skipped.  Siblings are visited in sorted order so the
registration order of conflicting patterns is reproducible.
"""

from collections.abc import Iterator
from pathlib import Path

from prowl._errors import InvalidControllerPathError

_SOURCE_SUFFIX = ".py"

# Aggregator modules, never controllers
_AGGREGATOR_STEM = "__init__"

# A trailing segment that maps to its parent directory
_INDEX_SEGMENT = "index"


def check_root(root: Path | str | None) -> Path:
    """Return *root* as a Path if it is a usable controllers directory.

    Raises:
        InvalidControllerPathError: If *root* is missing, relative, or not a
            directory.

    """
    if root is None or str(root) == "":
        raise InvalidControllerPathError(root)
    path = Path(root)
    if not path.is_absolute() or not path.is_dir():
        raise InvalidControllerPathError(root)
    return path


def scan_controllers(root: Path | str) -> Iterator[Path]:
    """Yield absolute controller source paths under *root*, depth first.

    The root is validated before the first path is produced.
    """
    return _walk(check_root(root))


def _walk(directory: Path) -> Iterator[Path]:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            if entry.name.startswith(".") or entry.name == "__pycache__":
                continue
            yield from _walk(entry)
        elif entry.is_file() and _is_controller_source(entry):
            yield entry


def _is_controller_source(path: Path) -> bool:
    return path.suffix == _SOURCE_SUFFIX and path.stem != _AGGREGATOR_STEM


def derive_route_path(path: Path | str, root: Path | str) -> str:
    """Derive the route path for a controller file under *root*.

    ``v1/Hello.py``        -> ``/v1/hello``
    ``v1/utils/index.py``  -> ``/v1/utils``

    Idempotent: passing an already-derived route path back in (with root
    ``/``) returns it unchanged.
    """
    path = Path(path)
    root = Path(root)

    relative = path.relative_to(root) if path.is_relative_to(root) else path
    if relative.suffix == _SOURCE_SUFFIX:
        relative = relative.with_suffix("")
    parts = [p.lower() for p in relative.parts if p != relative.anchor]

    if parts and parts[-1] == _INDEX_SEGMENT:
        parts.pop()

    return "/" + "/".join(parts)
