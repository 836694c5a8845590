"""Prowl error hierarchy.

All prowl-specific errors inherit from ProwlError for easy catching.
"""

from typing import Any


class ProwlError(Exception):
    """Base error for all prowl operations."""


class ConfigError(ProwlError):
    """Invalid or missing configuration."""


class InvalidControllerPathError(ConfigError):
    """The controllers root is missing, relative, or not a directory."""

    def __init__(self, path: object) -> None:
        self.path = str(path) if path is not None else "undefined"
        super().__init__(f"Controller path {self.path!r} is not valid")


class DefinitionError(ProwlError):
    """A discovered controller is defined incorrectly."""


class MethodHandlerNotDefinedError(DefinitionError):
    """A controller exposes no verb handler and no ``handle`` fallback."""

    def __init__(self, controller_name: str) -> None:
        self.controller_name = controller_name
        super().__init__(
            f"Controller {controller_name!r} must define at least 1 http method, "
            f"or define the handle method"
        )


class SchemaError(DefinitionError):
    """A schema bundle or param spec has the wrong shape."""


class ControllerLoadError(ProwlError):
    """A controller module could not be imported."""

    def __init__(self, source: object, message: str) -> None:
        self.source = str(source)
        super().__init__(message)


class ControllerError(ProwlError):
    """Raised by controller code while handling a request.

    The host router renders it as a JSON error body with *status*.
    """

    def __init__(self, message: str, status: int = 500) -> None:
        self.status = status
        super().__init__(message)


class MethodNotAllowedError(ControllerError):
    """A request reached a controller that has no handler for its verb."""

    def __init__(self, method: str, controller_name: str) -> None:
        self.method = method
        super().__init__(
            f"Controller {controller_name!r} does not handle {method}", status=405,
        )


class RequestValidationError(ControllerError):
    """A request failed validation against one schema facet."""

    def __init__(self, facet: str, errors: list[dict[str, Any]]) -> None:
        self.facet = facet
        self.errors = errors
        detail = errors[0]["message"] if errors else "invalid"
        super().__init__(f"{facet} {detail}", status=400)
