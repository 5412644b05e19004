"""Field classification and per-field emission rules."""

from dataclasses import dataclass
from enum import StrEnum, auto

from .typeexpr import TypeShape
from .types import FieldDescriptor, FieldStyle, TypeDescriptor, VariantDescriptor

# Wrapper names are matched by identifier text only
OPTION_WRAPPER = "Option"
SEQUENCE_WRAPPER = "Vec"


class FieldKind(StrEnum):
    """Classification of a field's declared type."""

    OPTIONAL = auto()  # Option<T>: printed as T, skipped when absent
    SEQUENCE = auto()  # Vec<T>: skipped when empty
    PLAIN = auto()


class BuilderForm(StrEnum):
    """Rendering convention used for a variant."""

    STRUCT = auto()  # Name { a: 1, b: 2 }
    TUPLE = auto()  # Name(1, 2)


class EmissionRule(StrEnum):
    """When a field's render call runs."""

    ALWAYS = auto()
    IF_PRESENT = auto()
    IF_NON_EMPTY = auto()


_RULES = {
    FieldKind.OPTIONAL: EmissionRule.IF_PRESENT,
    FieldKind.SEQUENCE: EmissionRule.IF_NON_EMPTY,
    FieldKind.PLAIN: EmissionRule.ALWAYS,
}


@dataclass(frozen=True)
class FieldPlan:
    """Analysed view of one field."""

    field: FieldDescriptor
    kind: FieldKind
    rule: EmissionRule

    @property
    def label(self) -> str | None:
        """Name printed next to the value, None for positional fields."""
        return self.field.name


@dataclass(frozen=True)
class VariantPlan:
    """Analysed view of one variant, fields in declaration order."""

    variant: VariantDescriptor
    path: str
    form: BuilderForm
    fields: tuple[FieldPlan, ...]


def classify(shape: TypeShape) -> FieldKind:
    """Classify a declared type by the first segment of its path."""
    outer = shape.outer_name
    if outer == OPTION_WRAPPER:
        return FieldKind.OPTIONAL
    if outer == SEQUENCE_WRAPPER:
        return FieldKind.SEQUENCE
    return FieldKind.PLAIN


def select_builder_form(style: FieldStyle) -> BuilderForm:
    """Choose the builder for a variant's field style."""
    if style == FieldStyle.POSITIONAL:
        return BuilderForm.TUPLE
    return BuilderForm.STRUCT


def emission_rule(field: FieldDescriptor) -> EmissionRule:
    return _RULES[classify(field.type)]


def plan_field(field: FieldDescriptor) -> FieldPlan:
    kind = classify(field.type)
    return FieldPlan(field=field, kind=kind, rule=_RULES[kind])


def plan_variant(t: TypeDescriptor, variant: VariantDescriptor) -> VariantPlan:
    return VariantPlan(
        variant=variant,
        path=t.variant_path(variant),
        form=select_builder_form(variant.style),
        fields=tuple(plan_field(f) for f in variant.fields),
    )


def plan_type(t: TypeDescriptor) -> list[VariantPlan]:
    """Analyse every variant of a type, in declaration order."""
    return [plan_variant(t, v) for v in t.variants]
