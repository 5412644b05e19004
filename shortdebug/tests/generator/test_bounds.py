"""Tests for the debug-formattable requirement on field types."""

import json

import pytest

from shortdebug.generator import parse
from shortdebug.generator.bounds import UnsupportedFieldTypeError, check_bounds


def _types(*field_types, **extra):
    fields = [{"name": f"f{i}", "type": t} for i, t in enumerate(field_types)]
    return parse(json.dumps({"name": "Rec", "variants": [{"name": "Rec", "style": "named", "fields": fields}], **extra}))


def describe_check_bounds():
    def accepts_builtins():
        check_bounds(_types("i32", "String", "Option<Vec<u8>>", "HashMap<String, f64>", "(bool, char)"))

    def accepts_types_from_the_same_batch():
        types = parse(
            """
            [
                {"name": "Inner", "variants": [{"name": "Inner", "style": "none"}]},
                {"name": "Outer", "variants": [{"name": "Outer", "style": "named", "fields": [
                    {"name": "inner", "type": "Option<Inner>"},
                    {"name": "me", "type": "Vec<Outer>"}
                ]}]}
            ]
            """
        )
        check_bounds(types)

    def accepts_generic_parameters():
        check_bounds(_types("T", "Vec<T>", generics=["T"]))

    def accepts_extern_names():
        check_bounds(_types("Uuid", "Vec<Uuid>"), extern=["Uuid"])

    def uses_the_last_path_segment():
        check_bounds(_types("std::collections::HashMap<String, u8>"))

    def rejects_unknown_types(expect):
        with pytest.raises(UnsupportedFieldTypeError) as e:
            check_bounds(_types("i32", "Uuid"))
        expect(str(e.value)) == "Rec.f1: type Uuid (in Uuid) is not debug-formattable"

    @pytest.mark.parametrize(
        "text", ["Vec<Uuid>", "Option<Box<Uuid>>", "(u8, Uuid)", "&Uuid", "[Uuid; 2]", "HashMap<Uuid, u8>"]
    )
    def rejects_unknown_nested_types(text):
        with pytest.raises(UnsupportedFieldTypeError):
            check_bounds(_types(text))

    def generic_parameters_are_scoped_to_their_type():
        types = parse(
            """
            [
                {"name": "A", "generics": ["T"], "variants": [{"name": "A", "style": "positional", "fields": [
                    {"type": "T"}
                ]}]},
                {"name": "B", "variants": [{"name": "B", "style": "positional", "fields": [
                    {"type": "T"}
                ]}]}
            ]
            """
        )
        with pytest.raises(UnsupportedFieldTypeError, match="B.0: type T"):
            check_bounds(types)

    def names_the_union_variant():
        types = parse(
            """
            {"name": "U", "kind": "union", "variants": [
                {"name": "Ok", "style": "none"},
                {"name": "Bad", "style": "named", "fields": [{"name": "value", "type": "Thing"}]}
            ]}
            """
        )
        with pytest.raises(UnsupportedFieldTypeError, match="U.Bad.value"):
            check_bounds(types)
