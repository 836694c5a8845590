"""Shared test fixtures for prowl."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from prowl.router import RouteTable


@pytest.fixture
def controllers_dir(tmp_path: Path) -> Path:
    """Create an empty controllers/ directory."""
    d = tmp_path / "controllers"
    d.mkdir()
    return d


@pytest.fixture
def table() -> RouteTable:
    """An empty in-memory host router."""
    return RouteTable()


def write_controller(root: Path, name: str, content: str) -> Path:
    """Write a controller module under *root* and return its path."""
    p = root / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(content))
    return p


HELLO = """\
    from prowl import Controller


    class Hello(Controller):
        async def get(self, request):
            return "hi"
"""

SECURED = """\
    from prowl import SecureController


    class Vault(SecureController):
        def authorize(self, request):
            return request.headers.get("authorization") == "Bearer ok"

        async def get(self, request):
            return "secret"
"""

MULTI_METHOD = """\
    from prowl import Controller


    class Items(Controller):
        params = {"get": ["id"], "delete": "/:id"}
        schema = {
            "params": {
                "get": {"type": "object", "properties": {"id": {"type": "integer"}}},
                "delete": {"type": "object", "properties": {"id": {"type": "integer"}}},
            },
            "body": {
                "post": {"type": "object", "required": ["name"]},
                "type": "object",
            },
            "response": {
                "get": {200: {"type": "array"}},
                200: {"type": "object"},
            },
        }

        async def post(self, request):
            return {"created": True}

        async def get(self, request):
            return []

        async def delete(self, request):
            return {"deleted": True}
"""


def make_project(root: Path) -> Path:
    """Lay out a small controllers tree with two scopes; returns the controllers dir."""
    controllers = root / "controllers"
    write_controller(controllers, "hello.py", HELLO)
    write_controller(controllers, "v1/items.py", MULTI_METHOD)
    write_controller(controllers, "v1/vault.py", SECURED)
    write_controller(controllers, "v1/__init__.py", "")
    write_controller(controllers, ".auth/base.py", "raise RuntimeError('never imported')\n")
    return controllers
