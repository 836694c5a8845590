"""Tests for prowl.schema — per-method schema specialization."""

import copy

import pytest

from prowl._errors import SchemaError
from prowl.methods import HttpMethod
from prowl.schema import check_schema_shape, specialize_facet, specialize_schema

OBJECT_200 = {"type": "object", "properties": {"hi": {"type": "string"}}}
GET_200 = {200: {"type": "object", "required": ["hithere"]}}


# ---------------------------------------------------------------------------
# specialize_facet
# ---------------------------------------------------------------------------


class TestSpecializeFacet:
    """Method key wins, otherwise other verbs' keys are dropped."""

    def test_method_key_wins(self) -> None:
        facet = {"get": {"type": "object"}, "type": "string"}
        assert specialize_facet(facet, HttpMethod.GET) == {"type": "object"}

    def test_other_verbs_removed(self) -> None:
        facet = {"put": {"required": ["a"]}, "post": {"required": ["b"]}, "type": "object"}
        assert specialize_facet(facet, HttpMethod.PATCH) == {"type": "object"}

    def test_plain_schema_kept_whole(self) -> None:
        facet = {"type": "object", "properties": {"get": {"type": "string"}}}
        assert specialize_facet(facet, HttpMethod.POST) == facet

    def test_numeric_keys_never_removed(self) -> None:
        facet = {200: OBJECT_200, "404": {"type": "null"}, "get": GET_200}
        result = specialize_facet(facet, HttpMethod.POST)
        assert result == {200: OBJECT_200, "404": {"type": "null"}}

    def test_returns_copy(self) -> None:
        facet = {"get": {"properties": {"a": {"type": "string"}}}}
        result = specialize_facet(facet, HttpMethod.GET)
        result["properties"]["a"]["type"] = "integer"
        assert facet["get"]["properties"]["a"]["type"] == "string"


# ---------------------------------------------------------------------------
# specialize_schema
# ---------------------------------------------------------------------------


class TestSpecializeSchema:
    """Whole-bundle specialization."""

    def test_response_for_get_is_method_fragment(self) -> None:
        bundle = {"response": {200: OBJECT_200, "get": GET_200}}
        assert specialize_schema(bundle, HttpMethod.GET)["response"] == GET_200

    def test_response_for_post_keeps_status_codes(self) -> None:
        bundle = {"response": {200: OBJECT_200, "get": GET_200}}
        assert specialize_schema(bundle, HttpMethod.POST)["response"] == {200: OBJECT_200}

    def test_get_never_carries_body(self) -> None:
        bundle = {"body": {"type": "object", "required": ["hello"]}}
        assert "body" not in specialize_schema(bundle, HttpMethod.GET)

    def test_get_drops_method_specific_body_too(self) -> None:
        bundle = {"body": {"get": {"type": "object"}}}
        assert "body" not in specialize_schema(bundle, HttpMethod.GET)

    def test_empty_body_dropped(self) -> None:
        bundle = {"body": {"put": {"type": "object"}}}
        assert "body" not in specialize_schema(bundle, HttpMethod.POST)

    def test_body_kept_for_post(self) -> None:
        bundle = {"body": {"put": {"required": ["a"]}, "type": "object"}}
        assert specialize_schema(bundle, HttpMethod.POST)["body"] == {"type": "object"}

    def test_method_body_selected(self) -> None:
        bundle = {"body": {"put": {"required": ["a"]}, "type": "object"}}
        assert specialize_schema(bundle, HttpMethod.PUT)["body"] == {"required": ["a"]}

    def test_empty_params_facet_kept(self) -> None:
        bundle = {"params": {"get": {"type": "object"}}}
        assert specialize_schema(bundle, HttpMethod.POST) == {"params": {}}

    def test_facets_independent(self) -> None:
        bundle = {
            "querystring": {"type": "object", "required": ["q"]},
            "params": {"delete": {"type": "object"}},
            "response": {"delete": {204: {"type": "null"}}, 200: OBJECT_200},
        }
        result = specialize_schema(bundle, HttpMethod.DELETE)
        assert result == {
            "querystring": {"type": "object", "required": ["q"]},
            "params": {"type": "object"},
            "response": {204: {"type": "null"}},
        }

    def test_no_method_keys_survive(self) -> None:
        bundle = {
            facet: {"get": {"a": 1}, "post": {"b": 2}, "put": {"c": 3}, "type": "object"}
            for facet in ("params", "querystring", "body", "response")
        }
        for method in HttpMethod:
            result = specialize_schema(bundle, method)
            for facet in result.values():
                assert not {"get", "post", "put"} & set(facet)

    def test_extra_keys_pass_through(self) -> None:
        bundle = {"tags": ["users"], "response": {200: OBJECT_200}}
        assert specialize_schema(bundle, HttpMethod.GET)["tags"] == ["users"]

    def test_input_not_mutated(self) -> None:
        bundle = {
            "body": {"post": {"type": "object"}, "put": {"type": "object"}},
            "response": {"get": GET_200, 200: OBJECT_200},
        }
        snapshot = copy.deepcopy(bundle)
        for method in HttpMethod:
            specialize_schema(bundle, method)
        assert bundle == snapshot

    def test_results_share_no_nested_objects(self) -> None:
        bundle = {"querystring": {"type": "object", "properties": {"q": {"type": "string"}}}}
        post = specialize_schema(bundle, HttpMethod.POST)
        put = specialize_schema(bundle, HttpMethod.PUT)
        assert post["querystring"]["properties"] is not put["querystring"]["properties"]


# ---------------------------------------------------------------------------
# check_schema_shape
# ---------------------------------------------------------------------------


class TestCheckSchemaShape:
    """Shape validation at controller construction."""

    def test_valid_bundle(self) -> None:
        check_schema_shape({"body": {"type": "object"}, "response": {200: {}}}, "C")

    def test_bundle_must_be_mapping(self) -> None:
        with pytest.raises(SchemaError, match="C.schema must be a mapping"):
            check_schema_shape(["body"], "C")

    def test_facet_must_be_mapping(self) -> None:
        with pytest.raises(SchemaError, match="'querystring'"):
            check_schema_shape({"querystring": "object"}, "C")

    def test_method_entry_must_be_mapping(self) -> None:
        with pytest.raises(SchemaError, match="'get'"):
            check_schema_shape({"body": {"get": True}}, "C")
