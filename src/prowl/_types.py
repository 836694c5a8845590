"""Shared type definitions for prowl."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

# Route URL path (e.g., "/v1/hello", "/v1/users/:id")
type RoutePath = str

# Grouping label declared on a controller class
type Scope = str

# Request handler bound to a controller instance
type Handler = Callable[..., Any]

# One JSON-Schema-like object
type SchemaObject = dict[str, Any]

# One facet of a schema bundle: a single schema, or a map keyed by method name
type SchemaFacet = Mapping[str, Any]

# params / querystring / body / response facets
type SchemaBundle = Mapping[str, SchemaFacet]

# Parameter names, a pre-formatted suffix, or a per-method map of either
type ParamSpec = str | Sequence[str] | Mapping[str, str | Sequence[str]]
