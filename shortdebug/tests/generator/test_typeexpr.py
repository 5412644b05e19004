"""Tests for type expression parsing."""

import pytest

from shortdebug.generator.typeexpr import ShapeKind, TypeSyntaxError, parse_type


def describe_parse_path():
    def parses_simple_name(expect):
        shape = parse_type("i32")
        expect(shape.kind) == ShapeKind.PATH
        expect(shape.path) == ("i32",)
        expect(shape.arguments) == ()

    def parses_generic_argument(expect):
        shape = parse_type("Option<String>")
        expect(shape.outer_name) == "Option"
        expect(len(shape.arguments)) == 1
        expect(shape.arguments[0].path) == ("String",)

    def parses_nested_generics(expect):
        shape = parse_type("Vec<Option<u8>>")
        expect(shape.outer_name) == "Vec"
        expect(shape.arguments[0].outer_name) == "Option"
        expect(str(shape)) == "Vec<Option<u8>>"

    def parses_several_arguments(expect):
        shape = parse_type("HashMap<String, Vec<u8>>")
        expect(len(shape.arguments)) == 2
        expect(str(shape)) == "HashMap<String, Vec<u8>>"

    def parses_qualified_path(expect):
        shape = parse_type("std::option::Option<T>")
        expect(shape.path) == ("std", "option", "Option")
        expect(shape.outer_name) == "std"

    def drops_leading_colons(expect):
        shape = parse_type("::std::vec::Vec<u8>")
        expect(shape.path) == ("std", "vec", "Vec")

    def ignores_whitespace(expect):
        expect(str(parse_type("  Option < String >  "))) == "Option<String>"


def describe_parse_opaque_shapes():
    def parses_tuple(expect):
        shape = parse_type("(i32, String)")
        expect(shape.kind) == ShapeKind.TUPLE
        expect(len(shape.arguments)) == 2
        expect(shape.outer_name) == None

    def parses_unit(expect):
        shape = parse_type("()")
        expect(shape.kind) == ShapeKind.TUPLE
        expect(shape.arguments) == ()

    def parses_one_element_tuple(expect):
        shape = parse_type("(u8,)")
        expect(shape.kind) == ShapeKind.TUPLE
        expect(str(shape)) == "(u8,)"

    def unwraps_parentheses(expect):
        shape = parse_type("(Option<u8>)")
        expect(shape.kind) == ShapeKind.PATH
        expect(shape.outer_name) == "Option"

    def parses_reference(expect):
        shape = parse_type("&Option<u8>")
        expect(shape.kind) == ShapeKind.REFERENCE
        expect(shape.mutable) == False
        expect(shape.arguments[0].outer_name) == "Option"

    def parses_mutable_reference_with_lifetime(expect):
        shape = parse_type("&'a mut Vec<u8>")
        expect(shape.kind) == ShapeKind.REFERENCE
        expect(shape.mutable) == True
        expect(str(shape)) == "&mut Vec<u8>"

    def parses_array(expect):
        shape = parse_type("[u8; 4]")
        expect(shape.kind) == ShapeKind.ARRAY
        expect(shape.length) == 4
        expect(str(shape)) == "[u8; 4]"

    def parses_slice(expect):
        shape = parse_type("[u8]")
        expect(shape.kind) == ShapeKind.ARRAY
        expect(shape.length) == None


def describe_parse_errors():
    def rejects_unclosed_generic():
        with pytest.raises(TypeSyntaxError):
            parse_type("Option<")

    def rejects_empty_text():
        with pytest.raises(TypeSyntaxError):
            parse_type("")

    def rejects_non_string():
        with pytest.raises(TypeSyntaxError):
            parse_type(42)

    def rejects_two_names():
        with pytest.raises(TypeSyntaxError):
            parse_type("Option String")
