"""Request validation against a specialized schema bundle.

Validators are compiled once per route with ``jsonschema``.  Path params and
query string values arrive as strings; before validation they are coerced to
the ``integer``, ``number`` or ``boolean`` type the schema declares for them,
so ``?page=2`` satisfies ``{"page": {"type": "integer"}}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError as JSONSchemaError

from prowl._errors import RequestValidationError, SchemaError

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def _coerce_value(value: Any, declared: object) -> Any:
    if not isinstance(value, str):
        return value
    types = declared if isinstance(declared, list) else [declared]
    try:
        if "integer" in types:
            return int(value)
        if "number" in types:
            return float(value)
    except ValueError:
        return value
    if "boolean" in types:
        lowered = value.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return value


def coerce_strings(values: Mapping[str, Any], schema: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce string *values* to the scalar types declared in *schema*."""
    properties = schema.get("properties") or {}
    coerced: dict[str, Any] = {}
    for key, value in values.items():
        prop = properties.get(key)
        if isinstance(prop, Mapping) and "type" in prop:
            coerced[key] = _coerce_value(value, prop["type"])
        else:
            coerced[key] = value
    return coerced


REQUEST_FACETS: tuple[str, ...] = ("params", "querystring", "body")


def _compile(facet: Mapping[str, Any] | None, where: str) -> Draft7Validator | None:
    if not facet:
        return None
    try:
        Draft7Validator.check_schema(facet)
    except JSONSchemaError as exc:
        msg = f"{where} is not a valid JSON Schema: {exc.message}"
        raise SchemaError(msg) from exc
    return Draft7Validator(facet)


def check_request_schema(schema: Mapping[str, Any] | None, owner: str) -> None:
    """Check that every request facet of *schema* is a valid Draft 7 schema.

    Raises:
        SchemaError: On the first facet that does not compile.

    """
    for name in REQUEST_FACETS:
        _compile((schema or {}).get(name), f"{owner}.schema[{name!r}]")


class RequestValidator:
    """Validates the params, querystring and body of one route.

    Args:
        schema: A single-method schema bundle, or None for no validation.
        owner: Label used in schema error messages.

    Raises:
        SchemaError: If a request facet is not a valid JSON Schema.

    """

    __slots__ = ("_body", "_params", "_querystring")

    def __init__(self, schema: Mapping[str, Any] | None, owner: str = "route") -> None:
        schema = schema or {}
        self._params = _compile(schema.get("params"), f"{owner}.schema['params']")
        self._querystring = _compile(
            schema.get("querystring"), f"{owner}.schema['querystring']",
        )
        self._body = _compile(schema.get("body"), f"{owner}.schema['body']")

    @property
    def expects_body(self) -> bool:
        """True if the route declares a body schema."""
        return self._body is not None

    def validate_params(self, values: Mapping[str, Any]) -> Mapping[str, Any]:
        """Validate path params; returns the coerced values."""
        return self._validate_strings("params", self._params, values)

    def validate_querystring(self, values: Mapping[str, Any]) -> Mapping[str, Any]:
        """Validate query string values; returns the coerced values."""
        return self._validate_strings("querystring", self._querystring, values)

    def validate_body(self, body: Any) -> Any:
        """Validate a decoded JSON body."""
        if self._body is not None:
            _raise_for(self._body, body, "body")
        return body

    def _validate_strings(
        self,
        facet: str,
        validator: Draft7Validator | None,
        values: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        # Without a schema the host's own mapping is handed through untouched
        if validator is None:
            return values
        coerced = coerce_strings({key: values.get(key) for key in values}, validator.schema)
        _raise_for(validator, coerced, facet)
        return coerced


def _raise_for(validator: Draft7Validator, instance: Any, facet: str) -> None:
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.absolute_path))
    if errors:
        raise RequestValidationError(
            facet,
            [
                {
                    "message": error.message,
                    "path": "/" + "/".join(str(p) for p in error.absolute_path),
                }
                for error in errors
            ],
        )
