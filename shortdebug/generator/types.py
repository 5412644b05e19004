"""Type descriptors consumed by the code generator.

A descriptor is the structural description of one type definition, produced by
a front end and handed to the generator as JSON.
"""

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from dataclasses_json import DataClassJsonMixin, config

from .typeexpr import ShapeKind, TypeShape, parse_type


class FieldStyle(StrEnum):
    """How the fields of a variant are declared."""

    NAMED = auto()
    POSITIONAL = auto()
    NONE = auto()


class TypeKind(StrEnum):
    """Record (one variant) or tagged union (one variant per case)."""

    RECORD = auto()
    UNION = auto()


@dataclass
class AnnotationArg(DataClassJsonMixin):
    """Represents an argument to an annotation."""

    value: Any
    name: str | None = None


@dataclass
class Annotation(DataClassJsonMixin):
    """Represents an annotation on a type, variant or field."""

    name: str
    arguments: list[AnnotationArg] = field(default_factory=list)


@dataclass
class FieldDescriptor(DataClassJsonMixin):
    """Represents one field of a variant.

    ``name`` is present iff the variant uses named fields. ``binding`` is the
    local name the field value is bound to inside the generated routine.
    """

    type: TypeShape = field(metadata=config(decoder=parse_type, encoder=str))
    name: str | None = None
    binding: str | None = None
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class VariantDescriptor(DataClassJsonMixin):
    """Represents one record shape: the whole record, or one union case."""

    name: str
    style: FieldStyle
    fields: list[FieldDescriptor] = field(default_factory=list)
    path: str | None = None
    annotations: list[Annotation] = field(default_factory=list)

    def __post_init__(self) -> None:
        for index, f in enumerate(self.fields):
            if f.binding is None:
                f.binding = f"_binding_{index}"


@dataclass
class TypeDescriptor(DataClassJsonMixin):
    """Represents a complete type definition."""

    name: str
    variants: list[VariantDescriptor]
    kind: TypeKind = TypeKind.RECORD
    module: str | None = None
    generics: list[str] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    def variant_path(self, variant: VariantDescriptor) -> str:
        """Class expression the generated code matches the variant against."""
        if variant.path:
            return variant.path
        if self.kind == TypeKind.UNION:
            return f"{self.name}.{variant.name}"
        return self.name


BUILTIN_TYPES = frozenset(
    [
        "bool",
        "char",
        "str",
        "String",
        "i8",
        "i16",
        "i32",
        "i64",
        "i128",
        "isize",
        "u8",
        "u16",
        "u32",
        "u64",
        "u128",
        "usize",
        "f32",
        "f64",
        "Option",
        "Vec",
        "VecDeque",
        "Box",
        "Rc",
        "Arc",
        "HashMap",
        "BTreeMap",
        "HashSet",
        "BTreeSet",
        "int",
        "float",
        "bytes",
        "list",
        "tuple",
        "dict",
        "set",
        "frozenset",
        "None",
        "Any",
    ]
)


def builtin_types() -> list[str]:
    """Return a list of type names that are always debug-formattable."""
    return sorted(BUILTIN_TYPES)


def referenced_names(shape: TypeShape) -> list[str]:
    """Every type name a shape refers to, outermost first."""
    names: list[str] = []
    if shape.kind == ShapeKind.PATH:
        names.append(shape.path[-1])
    for argument in shape.arguments:
        names.extend(referenced_names(argument))
    return names
