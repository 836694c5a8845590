"""Schema specialization — narrow a shared schema bundle to one HTTP method.

A controller's schema bundle has up to four facets: ``params``,
``querystring``, ``body`` and ``response``.  Each facet is either a single
schema applying to every method, or a mapping whose lowercase verb keys hold
method-specific schemas::

    schema = {
        "querystring": {"type": "object", "properties": {...}},
        "response": {
            "get": {200: {...}},
            200: {...},
        },
    }

Specializing for one method yields a bundle with at most one method's worth
of data per facet.  For each facet independently:

- A key equal to the method's lowercase name wins; the facet becomes the
  value under that key.
- Otherwise keys naming any *other* verb are dropped and everything else
  (``type``, ``properties``, numeric status codes, ...) is kept.

``body`` is dropped when it resolves to an empty object, and always for GET.

Both functions are pure: they return new structures and never mutate their
input, so descriptors built for different methods never share nested objects.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from prowl._errors import SchemaError
from prowl.methods import HttpMethod, is_method_name

if TYPE_CHECKING:
    from prowl._types import SchemaBundle

FACETS: tuple[str, ...] = ("params", "querystring", "body", "response")


def specialize_facet(facet: Mapping[str, Any], method: HttpMethod) -> dict[str, Any]:
    """Return the part of *facet* that applies to *method*."""
    key = method.handler_name
    if key in facet:
        return copy.deepcopy(dict(facet[key]))

    return {
        k: copy.deepcopy(v)
        for k, v in facet.items()
        if not is_method_name(k)
    }


def specialize_schema(bundle: SchemaBundle, method: HttpMethod) -> dict[str, Any]:
    """Narrow every facet of *bundle* to *method*.

    Keys outside the four facets are copied through unchanged.
    """
    narrowed: dict[str, Any] = {}

    for name, value in bundle.items():
        if name not in FACETS:
            narrowed[name] = copy.deepcopy(value)
            continue
        if value is None:
            continue
        narrowed[name] = specialize_facet(value, method)

    if "body" in narrowed and (method is HttpMethod.GET or not narrowed["body"]):
        del narrowed["body"]

    return narrowed


def check_schema_shape(bundle: object, owner: str) -> None:
    """Validate that *bundle* is a mapping of mapping facets.

    Raises:
        SchemaError: If the bundle or one of its facets is not a mapping, or
            a method-keyed entry is not a mapping.

    """
    if not isinstance(bundle, Mapping):
        msg = f"{owner}.schema must be a mapping, got {type(bundle).__name__}"
        raise SchemaError(msg)

    for name in FACETS:
        facet = bundle.get(name)
        if facet is None:
            continue
        if not isinstance(facet, Mapping):
            msg = f"{owner}.schema[{name!r}] must be a mapping, got {type(facet).__name__}"
            raise SchemaError(msg)
        for key, value in facet.items():
            if is_method_name(key) and not isinstance(value, Mapping):
                msg = (
                    f"{owner}.schema[{name!r}][{key!r}] must be a mapping, "
                    f"got {type(value).__name__}"
                )
                raise SchemaError(msg)
