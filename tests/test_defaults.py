"""Tests for literal encoding and default-value generation."""

import pytest
from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    GraphQLBoolean,
    GraphQLEnumType,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLList,
    GraphQLScalarType,
    GraphQLString,
    IntValueNode,
    ObjectValueNode,
    StringValueNode,
    print_ast,
)

from gqlexplorer.defaults import (
    EnumFallback,
    default_literal,
    default_required_arguments,
    default_required_input_fields,
    default_value_for,
    encode_value,
    first_declared_enum_value,
)
from gqlexplorer.exceptions import UnconstructibleDefaultError


class TestEncodeValue:
    """Test typed re-encoding of raw control text."""

    def test_int_literal(self):
        node = encode_value(GraphQLInt, "42")
        assert isinstance(node, IntValueNode)
        assert node.value == "42"

    def test_float_literal(self):
        node = encode_value(GraphQLFloat, "2.25")
        assert isinstance(node, FloatValueNode)
        assert node.value == "2.25"

    def test_float_accepts_integer_text(self):
        node = encode_value(GraphQLFloat, "3")
        assert isinstance(node, FloatValueNode)
        assert float(node.value) == 3.0

    def test_int_rejecting_text_falls_back_to_string(self):
        """Text the Int scalar rejects is kept verbatim as a String literal."""
        node = encode_value(GraphQLInt, "abc")
        assert isinstance(node, StringValueNode)
        assert node.value == "abc"

    def test_int_rejects_fraction(self):
        node = encode_value(GraphQLInt, "1.5")
        assert isinstance(node, StringValueNode)
        assert node.value == "1.5"

    def test_empty_number_becomes_empty_string(self):
        node = encode_value(GraphQLInt, "")
        assert isinstance(node, StringValueNode)
        assert node.value == ""

    @pytest.mark.parametrize("raw,expected", [("true", True), ("false", False)])
    def test_boolean_literal(self, raw, expected):
        node = encode_value(GraphQLBoolean, raw)
        assert isinstance(node, BooleanValueNode)
        assert node.value is expected

    @pytest.mark.parametrize("raw", ["notabool", "", "1", "TRUE"])
    def test_boolean_garbage_is_false(self, raw):
        node = encode_value(GraphQLBoolean, raw)
        assert isinstance(node, BooleanValueNode)
        assert node.value is False

    def test_string_literal(self):
        node = encode_value(GraphQLString, "hello")
        assert isinstance(node, StringValueNode)
        assert node.value == "hello"

    def test_id_literal_is_string(self):
        node = encode_value(GraphQLID, "42")
        assert isinstance(node, StringValueNode)
        assert node.value == "42"

    def test_enum_known_value(self, schema):
        node = encode_value(schema.get_type("Color"), "GREEN")
        assert isinstance(node, EnumValueNode)
        assert node.value == "GREEN"

    def test_enum_unknown_value_falls_back_to_first(self, schema):
        node = encode_value(schema.get_type("Color"), "PURPLE")
        assert isinstance(node, EnumValueNode)
        assert node.value == "RED"

    def test_enum_empty_falls_back_to_first(self, schema):
        node = encode_value(schema.get_type("Color"), "", EnumFallback.FIRST_DECLARED)
        assert node.value == "RED"

    def test_custom_scalar_is_string(self, schema):
        node = encode_value(schema.get_type("Date"), "2024-01-31")
        assert isinstance(node, StringValueNode)
        assert node.value == "2024-01-31"

    def test_custom_scalar_parser_error_falls_back_to_string(self):
        """Whatever a custom scalar's parser raises, the raw text is kept."""

        def parse_money(value):
            raise ArithmeticError(f"not an amount: {value}")

        money = GraphQLScalarType("Money", parse_value=parse_money)
        node = encode_value(money, "abc")
        assert isinstance(node, StringValueNode)
        assert node.value == "abc"

    def test_custom_enum_parser_error_falls_back_to_first(self):
        class BrokenColor(GraphQLEnumType):
            def parse_value(self, input_value):
                raise LookupError(input_value)

        broken = BrokenColor("Color", {"RED": None, "GREEN": None})
        node = encode_value(broken, "GREEN")
        assert isinstance(node, EnumValueNode)
        assert node.value == "RED"


class TestDefaultLiteral:
    """Test canonical seed literals."""

    def test_int_default(self):
        assert print_ast(default_literal(GraphQLInt)) == "10"

    def test_float_default(self):
        assert print_ast(default_literal(GraphQLFloat)) == "1.5"

    def test_boolean_default(self):
        assert print_ast(default_literal(GraphQLBoolean)) == "false"

    def test_string_default(self):
        assert print_ast(default_literal(GraphQLString)) == '""'

    def test_enum_default_is_first_declared(self, schema):
        role = schema.get_type("Role")
        assert default_literal(role).value == "ADMIN"
        assert first_declared_enum_value(role).value == "ADMIN"


class TestDefaultValueFor:
    """Test default value nodes for argument and input-field types."""

    def test_non_null_leaf(self, schema):
        id_arg = schema.query_type.fields["user"].args["id"]
        value = default_value_for("id", id_arg.type)
        assert isinstance(value, StringValueNode)

    def test_input_object_gets_required_fields_only(self, schema):
        filter_type = schema.get_type("UserFilter")
        value = default_value_for("filter", filter_type)
        assert isinstance(value, ObjectValueNode)
        names = [f.name.value for f in value.fields]
        assert names == ["role", "tags"]
        assert value.fields[0].value.value == "ADMIN"
        # A single element stands in for the required list
        assert isinstance(value.fields[1].value, StringValueNode)

    def test_nested_input_object_defaults(self, schema):
        range_type = schema.get_type("RangeInput")
        fields = default_required_input_fields(range_type)
        assert [f.name.value for f in fields] == ["from", "to"]
        assert all(isinstance(f.value, IntValueNode) for f in fields)

    def test_list_type_seeds_element_default(self, schema):
        list_arg = schema.query_type.fields["ids"].args["list"]
        value = default_value_for("list", list_arg.type)
        assert print_ast(value) == '""'

    def test_list_of_input_objects_seeds_object(self, schema):
        value = default_value_for("ranges", GraphQLList(schema.get_type("RangeInput")))
        assert isinstance(value, ObjectValueNode)
        assert [f.name.value for f in value.fields] == ["from", "to"]

    def test_output_type_is_unconstructible(self, schema):
        with pytest.raises(UnconstructibleDefaultError) as exc_info:
            default_value_for("user", schema.get_type("User"))
        assert exc_info.value.type_name == "User"


class TestDefaultRequiredArguments:
    """Test argument seeding for newly added fields."""

    def test_required_arguments_in_declared_order(self, schema):
        args = default_required_arguments(schema.query_type.fields["posts"])
        assert [a.name.value for a in args] == ["a", "b"]
        assert print_ast(args[0]) == "a: 10"
        assert print_ast(args[1]) == 'b: ""'

    def test_arguments_with_defaults_are_optional(self, schema):
        args = default_required_arguments(schema.query_type.fields["posts"])
        assert "c" not in [a.name.value for a in args]

    def test_no_required_arguments(self, schema):
        assert default_required_arguments(schema.query_type.fields["hero"]) == ()

    def test_required_list_argument_is_seeded(self, schema):
        args = default_required_arguments(schema.query_type.fields["ids"])
        assert [print_ast(a) for a in args] == ['list: ""']
