"""Group loaded controller modules by scope."""

from collections.abc import Iterable

from prowl.routes.loader import ControllerModule


def classify_scopes(
    modules: Iterable[ControllerModule],
) -> dict[str, list[ControllerModule]]:
    """Partition *modules* by their discovery-time scope.

    Scopes appear in order of first occurrence and modules keep their
    relative order within a scope.
    """
    scoped: dict[str, list[ControllerModule]] = {}
    for module in modules:
        scoped.setdefault(module.scope, []).append(module)
    return scoped
