"""Type expression parser using Lark.

Field types arrive from the front end as type expression strings such as
``Option<String>``, ``std::vec::Vec<(u8, u8)>`` or ``&'a [u32; 4]``. Only the
outer shape matters to the generator, so the parsed form is deliberately small.
"""

import os
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from lark import Lark, Token
from lark.exceptions import LarkError
from lark.visitors import Transformer

_g_parser: Lark | None = None


class TypeSyntaxError(ValueError):
    """Raised when a type expression cannot be parsed."""


class ShapeKind(StrEnum):
    """Outer shape of a type expression."""

    PATH = auto()
    TUPLE = auto()
    REFERENCE = auto()
    ARRAY = auto()


@dataclass(frozen=True)
class TypeShape:
    """Parsed type expression.

    - PATH: ``path`` holds the segments, ``arguments`` the generic arguments
    - TUPLE: ``arguments`` holds the element types
    - REFERENCE: ``arguments`` holds the referent, ``mutable`` marks ``&mut``
    - ARRAY: ``arguments`` holds the element, ``length=None`` for a slice
    """

    kind: ShapeKind
    path: tuple[str, ...] = ()
    arguments: tuple["TypeShape", ...] = ()
    length: int | None = None
    mutable: bool = False

    def __str__(self) -> str:
        if self.kind == ShapeKind.PATH:
            text = "::".join(self.path)
            if self.arguments:
                text += "<" + ", ".join(str(a) for a in self.arguments) + ">"
            return text
        if self.kind == ShapeKind.TUPLE:
            if len(self.arguments) == 1:
                return f"({self.arguments[0]},)"
            return "(" + ", ".join(str(a) for a in self.arguments) + ")"
        if self.kind == ShapeKind.REFERENCE:
            return ("&mut " if self.mutable else "&") + str(self.arguments[0])
        if self.length is None:
            return f"[{self.arguments[0]}]"
        return f"[{self.arguments[0]}; {self.length}]"

    @property
    def outer_name(self) -> str | None:
        """First path segment, the only part the field classifier looks at."""
        if self.kind != ShapeKind.PATH:
            return None
        return self.path[0]


class TreeTransformer(Transformer):
    """Transform parse tree into type shapes."""

    def path(self, args: list[Any]) -> tuple[str, ...]:
        return tuple(str(a) for a in args)

    def generic_args(self, args: list[Any]) -> list[TypeShape]:
        return list(args)

    def path_type(self, args: list[Any]) -> TypeShape:
        arguments = tuple(args[1]) if len(args) > 1 else ()
        return TypeShape(kind=ShapeKind.PATH, path=args[0], arguments=arguments)

    def tuple_type(self, args: list[Any]) -> TypeShape:
        return TypeShape(kind=ShapeKind.TUPLE, arguments=tuple(args))

    def reference_type(self, args: list[Any]) -> TypeShape:
        mutable = any(isinstance(a, Token) and a.type == "MUT" for a in args)
        return TypeShape(kind=ShapeKind.REFERENCE, arguments=(args[-1],), mutable=mutable)

    def array_type(self, args: list[Any]) -> TypeShape:
        return TypeShape(kind=ShapeKind.ARRAY, arguments=(args[0],), length=int(args[1]))

    def slice_type(self, args: list[Any]) -> TypeShape:
        return TypeShape(kind=ShapeKind.ARRAY, arguments=(args[0],))


def parse_type(text: str) -> TypeShape:
    """Parse a type expression."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/typeexpr.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar)

    if not isinstance(text, str):
        raise TypeSyntaxError(f"Type expression must be a string, got {text!r}")

    try:
        tree = _g_parser.parse(text)
    except LarkError as e:
        raise TypeSyntaxError(f"Invalid type expression {text!r}: {e}") from e

    return TreeTransformer().transform(tree)
