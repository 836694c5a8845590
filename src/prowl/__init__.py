"""Prowl — directory-driven controller routing for Chirp.

Drop controller classes into a directory tree and prowl registers them as
routes, one file per path::

    controllers/
        hello.py             -> /hello
        v1/Users.py          -> /v1/users
        v1/utils/index.py    -> /v1/utils

A controller answers the verbs it has methods for::

    from prowl import Controller

    class Users(Controller):
        params = {"get": ["id"]}
        schema = {
            "params": {"get": {"type": "object", "properties": {"id": {"type": "integer"}}}},
            "body": {"type": "object", "required": ["name"]},
        }

        async def get(self, request): ...
        async def post(self, request): ...

Quick start::

    import prowl

    app = prowl.create_app("my-project/")
    app.run()

"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl.controller import Controller, SecureController

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "Controller",
    "ControllerError",
    "HttpMethod",
    "ProwlConfig",
    "SecureController",
    "__version__",
    "create_app",
    "register_controllers",
    "serve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import prowl`` fast; Chirp is only imported by ``create_app``
    and ``serve``.
    """
    if name == "Controller":
        from prowl.controller import Controller

        return Controller

    if name == "SecureController":
        from prowl.controller import SecureController

        return SecureController

    if name == "ControllerError":
        from prowl._errors import ControllerError

        return ControllerError

    if name == "HttpMethod":
        from prowl.methods import HttpMethod

        return HttpMethod

    if name == "ProwlConfig":
        from prowl.config import ProwlConfig

        return ProwlConfig

    if name == "register_controllers":
        from prowl.routes.emitter import register_controllers

        return register_controllers

    if name == "create_app":
        from prowl.app import create_app

        return create_app

    if name == "serve":
        from prowl.app import serve

        return serve

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
