"""Path parameter expansion.

A controller declares its path parameters as one of:

    params = ["first", "last"]            # every method: /base/:first/:last
    params = "/:first/:last"              # pre-formatted suffix, appended verbatim
    params = {"get": ["id"], "put": "/:id"}  # per method; absent methods get none

Parameters use the ``:name`` marker.  Host routers with a different syntax
translate it when registering (see ``prowl.router``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from prowl._errors import SchemaError
from prowl.methods import HttpMethod, is_method_name

if TYPE_CHECKING:
    from prowl._types import ParamSpec

PARAM_MARKER = ":"


def resolve_param_spec(
    spec: ParamSpec | None, method: HttpMethod,
) -> str | Sequence[str] | None:
    """Return the part of *spec* that applies to *method*.

    A mapping is looked up by the method's lowercase name; a missing key
    means no parameters for that method.
    """
    if isinstance(spec, Mapping):
        return spec.get(method.handler_name)
    return spec


def expand_url(base_url: str, spec: ParamSpec | None, method: HttpMethod) -> str:
    """Append the parameter segments that *spec* declares for *method*."""
    resolved = resolve_param_spec(spec, method)

    if resolved is None:
        return base_url

    if isinstance(resolved, str):
        suffix = resolved
    else:
        suffix = "".join(f"/{PARAM_MARKER}{name}" for name in resolved)

    # "/" + "/:id" must not become "//:id"
    return base_url.rstrip("/") + suffix or "/"


def check_param_shape(spec: object, owner: str) -> None:
    """Validate the shape of a param spec.

    Raises:
        SchemaError: On anything other than a string, a sequence of strings,
            or a mapping from verb names to either.

    """
    if spec is None:
        return
    if isinstance(spec, Mapping):
        for key, value in spec.items():
            if not is_method_name(key):
                msg = f"{owner}.params key {key!r} is not a lowercase HTTP method"
                raise SchemaError(msg)
            _check_single(value, f"{owner}.params[{key!r}]")
        return
    _check_single(spec, f"{owner}.params")


def _check_single(value: object, where: str) -> None:
    if isinstance(value, str):
        if value and not value.startswith("/"):
            msg = f"{where} must start with '/', got {value!r}"
            raise SchemaError(msg)
        return
    if isinstance(value, Sequence) and all(isinstance(v, str) and v for v in value):
        return
    msg = f"{where} must be a path suffix or a list of names, got {value!r}"
    raise SchemaError(msg)
