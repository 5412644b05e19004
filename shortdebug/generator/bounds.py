"""Debug-formattable requirement on field types."""

from collections.abc import Iterable

from .types import BUILTIN_TYPES, TypeDescriptor, TypeKind, referenced_names


class UnsupportedFieldTypeError(RuntimeError):
    """Raised when a field's type cannot be debug-formatted."""


def check_bounds(types: list[TypeDescriptor], extern: Iterable[str] = ()) -> None:
    """Require every field type to be debug-formattable.

    A name qualifies if it is a builtin, one of ``types``, a generic parameter
    of the owning type, or listed in ``extern``.
    """
    known = BUILTIN_TYPES | {t.name for t in types} | set(extern)

    for t in types:
        allowed = known | set(t.generics)
        for variant in t.variants:
            owner = f"{t.name}.{variant.name}" if t.kind == TypeKind.UNION else t.name
            for index, f in enumerate(variant.fields):
                for name in referenced_names(f.type):
                    if name not in allowed:
                        raise UnsupportedFieldTypeError(
                            f"{owner}.{f.name or index}: type {name} "
                            f"(in {f.type}) is not debug-formattable"
                        )
