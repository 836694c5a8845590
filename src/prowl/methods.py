"""HTTP verbs recognised as controller handler names.

The order of ``HttpMethod`` members is the detection order: a controller's
method set always iterates in this order, whatever order its class body
declares the handlers in.
"""

from enum import StrEnum


class HttpMethod(StrEnum):
    """Supported HTTP verbs, including the WebDAV extensions."""

    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"
    OPTIONS = "OPTIONS"
    SEARCH = "SEARCH"
    TRACE = "TRACE"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    MKCOL = "MKCOL"
    COPY = "COPY"
    MOVE = "MOVE"
    LOCK = "LOCK"
    UNLOCK = "UNLOCK"

    @property
    def handler_name(self) -> str:
        """Lowercase attribute name of the handler for this verb."""
        return self.value.lower()

    @classmethod
    def parse(cls, value: str) -> "HttpMethod":
        """Return the member for *value*, ignoring case.

        Raises:
            ValueError: If *value* is not a supported verb.

        """
        try:
            return cls(value.upper())
        except ValueError:
            msg = f"Unsupported HTTP method {value!r}"
            raise ValueError(msg) from None


# Lowercase handler names in detection order
METHOD_NAMES: tuple[str, ...] = tuple(m.handler_name for m in HttpMethod)

# Catch-all handler, matched against any verb
HANDLE_NAME = "handle"


def is_method_name(key: object) -> bool:
    """True if *key* is the lowercase name of a supported verb."""
    return isinstance(key, str) and key in METHOD_NAMES
