"""Type descriptor loading and validation."""

import json
import keyword
import logging
from typing import Any

from .typeexpr import TypeSyntaxError
from .types import Annotation, FieldStyle, TypeDescriptor, TypeKind, VariantDescriptor

logger = logging.getLogger(__name__)

# The only annotation accepted; reserved, it has no effect on output.
DEBUG_ANNOTATION = "debug"

# Names the generated routine uses for itself
RESERVED_NAMES = frozenset(
    ["self", "fmt", "debug_builder", "len", "type", "TypeError", "Formatter"]
)


class ValidationError(RuntimeError):
    """Raised when a type descriptor is malformed."""


def _is_identifier(text: str) -> bool:
    return isinstance(text, str) and text.isidentifier() and not keyword.iskeyword(text)


def _is_dotted_name(text: str) -> bool:
    return isinstance(text, str) and all(_is_identifier(part) for part in text.split("."))


def _check_annotations(owner: str, annotations: list[Annotation]) -> None:
    for annotation in annotations:
        if annotation.name != DEBUG_ANNOTATION:
            raise ValidationError(f"{owner}: unknown annotation '{annotation.name}'")
        logger.debug("%s: ignoring '%s' annotation", owner, annotation.name)


def _validate_variant(t: TypeDescriptor, variant: VariantDescriptor) -> None:
    owner = f"{t.name}.{variant.name}" if t.kind == TypeKind.UNION else t.name

    if not _is_identifier(variant.name):
        raise ValidationError(f"{owner}: variant name '{variant.name}' is not an identifier")
    if variant.path is not None and not _is_dotted_name(variant.path):
        raise ValidationError(f"{owner}: variant path '{variant.path}' is not a dotted name")
    _check_annotations(owner, variant.annotations)

    if variant.style == FieldStyle.NONE and variant.fields:
        raise ValidationError(f"{owner}: declared without fields but has {len(variant.fields)}")

    # Patterns look these up, so a binding of the same name would make them local
    class_names = {t.variant_path(v).split(".")[0] for v in t.variants}
    names: set[str] = set()
    bindings: set[str] = set()
    for index, f in enumerate(variant.fields):
        if variant.style == FieldStyle.NAMED and f.name is None:
            raise ValidationError(f"{owner}: field {index} has no name in a named variant")
        if variant.style == FieldStyle.POSITIONAL and f.name is not None:
            raise ValidationError(f"{owner}: field '{f.name}' is named in a positional variant")

        if f.name is not None:
            if not _is_identifier(f.name):
                raise ValidationError(f"{owner}: field name '{f.name}' is not an identifier")
            if f.name in names:
                raise ValidationError(f"{owner}: duplicate field '{f.name}'")
            names.add(f.name)

        if f.binding is None or not _is_identifier(f.binding):
            raise ValidationError(f"{owner}: binding '{f.binding}' is not an identifier")
        if keyword.issoftkeyword(f.binding) or f.binding in RESERVED_NAMES:
            raise ValidationError(f"{owner}: binding '{f.binding}' is reserved")
        if f.binding in class_names:
            raise ValidationError(f"{owner}: binding '{f.binding}' shadows a variant class")
        if f.binding in bindings:
            raise ValidationError(f"{owner}: duplicate binding '{f.binding}'")
        bindings.add(f.binding)

        _check_annotations(f"{owner}.{f.name or index}", f.annotations)


def validate(types: list[TypeDescriptor]) -> None:
    """Validate type descriptors."""
    seen: set[str] = set()

    for t in types:
        if not _is_identifier(t.name):
            raise ValidationError(f"Type name '{t.name}' is not an identifier")
        if t.name in seen:
            raise ValidationError(f"Type {t.name} described more than once")
        seen.add(t.name)

        if t.module is not None and not _is_dotted_name(t.module):
            raise ValidationError(f"{t.name}: module '{t.module}' is not a dotted name")
        for param in t.generics:
            if not _is_identifier(param):
                raise ValidationError(f"{t.name}: generic parameter '{param}' is not an identifier")
        _check_annotations(t.name, t.annotations)

        if not t.variants:
            raise ValidationError(f"{t.name}: type has no variants")
        if t.kind == TypeKind.RECORD and len(t.variants) > 1:
            raise ValidationError(f"{t.name}: record has {len(t.variants)} variants")

        variant_names: set[str] = set()
        for variant in t.variants:
            if variant.name in variant_names:
                raise ValidationError(f"{t.name}: duplicate variant '{variant.name}'")
            variant_names.add(variant.name)
            _validate_variant(t, variant)


def _decode(data: Any) -> list[TypeDescriptor]:
    items = data if isinstance(data, list) else [data]
    types: list[TypeDescriptor] = []
    for item in items:
        if not isinstance(item, dict):
            raise ValidationError(f"Expected a type descriptor object, got {item!r}")
        try:
            types.append(TypeDescriptor.from_dict(item))
        except TypeSyntaxError as e:
            raise ValidationError(str(e)) from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            name = item.get("name", "<unnamed>")
            raise ValidationError(f"Malformed descriptor for {name}: {e!r}") from e
    return types


def parse(text: str) -> list[TypeDescriptor]:
    """Parse a JSON document holding one type descriptor or a list of them."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid descriptor JSON: {e}") from e

    types = _decode(data)
    validate(types)

    logger.debug("Loaded %d type descriptor(s): %s", len(types), ", ".join(t.name for t in types))
    return types
