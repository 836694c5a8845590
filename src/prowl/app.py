"""Prowl application — controller discovery wired into a Chirp app.

``create_app`` is the main entry point: it loads configuration, builds a
Chirp ``App``, registers every discovered controller on it and returns the
app, ready to run.  A failed discovery pass raises before the app exists, so
a broken controller tree never serves traffic.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import TYPE_CHECKING

from prowl.config import ProwlConfig
from prowl.config_loader import load_config
from prowl.observability import DiscoveryCollector, EventLog
from prowl.router import ChirpRouter, RouteTable
from prowl.routes.emitter import register_controllers

if TYPE_CHECKING:
    from chirp import App

    from prowl.routes.emitter import RouteDescriptor
    from prowl.routes.loader import ModuleLoader


def _create_chirp_app(config: ProwlConfig) -> App:
    """Create a Chirp App configured from *config*."""
    from chirp import App, AppConfig

    app_config = AppConfig(
        debug=config.debug,
        host=config.host,
        port=config.port,
    )
    return App(config=app_config)


def _new_collector(config: ProwlConfig) -> DiscoveryCollector:
    return DiscoveryCollector(EventLog(max_events=config.max_events))


async def wire_controllers(
    app: App,
    config: ProwlConfig,
    *,
    loader: ModuleLoader | None = None,
    collector: DiscoveryCollector | None = None,
) -> dict[str, list[RouteDescriptor]]:
    """Register the controllers under ``config.controllers_path`` on *app*."""
    return await register_controllers(
        ChirpRouter(app),
        config.controllers_path,
        loader=loader,
        collector=collector if collector is not None else _new_collector(config),
    )


async def collect_routes(
    config: ProwlConfig,
    *,
    loader: ModuleLoader | None = None,
    collector: DiscoveryCollector | None = None,
) -> RouteTable:
    """Run discovery against an in-memory ``RouteTable`` and return it."""
    table = RouteTable()
    await register_controllers(
        table,
        config.controllers_path,
        loader=loader,
        collector=collector if collector is not None else _new_collector(config),
    )
    return table


def create_app(
    root: str | Path = ".",
    *,
    loader: ModuleLoader | None = None,
    collector: DiscoveryCollector | None = None,
    **kwargs: object,
) -> App:
    """Build a Chirp app with every controller under *root* registered.

    Must be called outside a running event loop; async callers use
    ``wire_controllers`` on an app of their own.

    Args:
        root: Project root directory.
        loader: Module loader (defaults to importing files).
        collector: Receives discovery events.
        **kwargs: Override ProwlConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    app = _create_chirp_app(config)
    asyncio.run(wire_controllers(app, config, loader=loader, collector=collector))
    return app


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Discover controllers and run the Chirp app.

    Args:
        root: Project root directory.
        **kwargs: Override ProwlConfig fields.

    """
    from prowl.report import print_routes

    config = load_config(Path(root), **kwargs)
    collector = _new_collector(config)
    t0 = time.perf_counter()

    app = _create_chirp_app(config)
    plan = asyncio.run(wire_controllers(app, config, collector=collector))

    load_ms = (time.perf_counter() - t0) * 1000
    print_routes(
        [d for descriptors in plan.values() for d in descriptors],
        config=config,
        load_ms=load_ms,
    )

    app.run(host=config.host, port=config.port)
