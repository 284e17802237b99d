"""Tests for schema helper predicates."""

from gqlexplorer.schema_utils import (
    is_expandable,
    is_list_input,
    is_required_input,
    parse_fragment_segment,
    possible_types,
    root_type_for,
    selectable_fields,
    unwrap_type,
)
from gqlexplorer.types import fragment_segment


class TestTypePredicates:
    def test_unwrap(self, schema):
        ids = schema.query_type.fields["ids"].args["list"]
        assert unwrap_type(ids.type).name == "ID"

    def test_is_list_input(self, schema):
        assert is_list_input(schema.query_type.fields["ids"].args["list"].type)
        assert not is_list_input(schema.query_type.fields["user"].args["id"].type)

    def test_required_means_non_null_without_default(self, schema):
        args = schema.query_type.fields["posts"].args
        assert is_required_input(args["a"])
        assert not is_required_input(args["c"])
        assert not is_required_input(schema.query_type.fields["flags"].args["count"])

    def test_is_expandable(self, schema):
        fields = schema.query_type.fields
        assert is_expandable(fields["user"].type)
        assert is_expandable(fields["hero"].type)
        assert is_expandable(fields["search"].type)
        assert not is_expandable(fields["colors"].type)

    def test_selectable_fields(self, schema):
        assert "id" in selectable_fields(schema.get_type("Character"))
        assert selectable_fields(schema.get_type("SearchResult")) == {}


class TestSchemaLookups:
    def test_root_types(self, schema, query_only_schema):
        assert root_type_for(schema, "mutation").name == "Mutation"
        assert root_type_for(query_only_schema, "subscription") is None

    def test_possible_types(self, schema):
        names = {t.name for t in possible_types(schema, schema.get_type("SearchResult"))}
        assert names == {"User", "Post"}
        assert possible_types(schema, schema.get_type("User")) == []


class TestFragmentSegments:
    def test_round_trip(self):
        assert parse_fragment_segment(fragment_segment("Droid")) == "Droid"

    def test_plain_field(self):
        assert parse_fragment_segment("hero") is None

    def test_missing_type_name(self):
        assert parse_fragment_segment("... on ") is None
