"""Route report — the table printed by ``prowl routes`` and ``prowl serve``.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from prowl.config import ProwlConfig
    from prowl.routes.emitter import RouteDescriptor


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def format_routes(descriptors: Sequence[RouteDescriptor]) -> list[str]:
    """Return one line per route: scope, methods, url and schema marker.

    Routes serving every verb (``handle``-only controllers) show ``*``.
    """
    from prowl.methods import HttpMethod

    rows: list[tuple[str, str, str, str]] = []
    for d in descriptors:
        if len(d.methods) == len(HttpMethod):
            methods = "*"
        else:
            methods = ",".join(str(m) for m in d.methods)
        marker = "schema" if d.schema is not None else ""
        rows.append((d.scope, methods, d.url, marker))

    if not rows:
        return []

    scope_w = max(len(r[0]) for r in rows)
    method_w = max(len(r[1]) for r in rows)

    return [
        f"{scope:<{scope_w}}  {methods:<{method_w}}  {url}"
        + (f"  {_DIM}[{marker}]{_RESET}" if marker else "")
        for scope, methods, url, marker in rows
    ]


def print_routes(
    descriptors: Sequence[RouteDescriptor],
    *,
    config: ProwlConfig | None = None,
    load_ms: float = 0.0,
) -> None:
    """Print the route table to stderr."""
    from prowl import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}Prowl{_RESET} {_DIM}v{__version__}{_RESET}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    count = len(descriptors)
    label = "route" if count == 1 else "routes"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {_GREEN}{count}{_RESET} {label} registered{timing}")

    if config is not None:
        lines.append(f"  {_DIM}└─{_RESET} controllers: {_DIM}{config.controllers_path}{_RESET}")

    if descriptors:
        lines.append("")
        lines.extend(f"  {line}" for line in format_routes(descriptors))
    else:
        lines.append(f"  {_YELLOW}!{_RESET} no controllers found")

    if config is not None:
        lines.append("")
        lines.append(f"  {_CYAN}http://{config.host}:{config.port}{_RESET}")

    lines.append("")
    print("\n".join(lines), file=sys.stderr)
