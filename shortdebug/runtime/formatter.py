"""Formatter and builders used by generated debug formatting routines."""

from collections.abc import Callable
from io import StringIO
from typing import Any, Protocol


class SupportsWrite(Protocol):
    def write(self, s: str, /) -> Any: ...


DebugRoutine = Callable[[Any, "Formatter"], None]


class Formatter:
    """Writes debug representations into a text sink.

    The sink is anything with a ``write(str)`` method. Errors raised by the
    sink propagate to the caller.

    Values whose class has no debug routine are written with ``repr()``, so
    strings keep Python quoting: ``'abc'``, not ``"abc"``.

    Example:
        fmt = Formatter(sys.stdout)
        fmt.debug_struct("Point").field("x", 3).field("y", 4).finish()
        # Point { x: 3, y: 4 }
    """

    def __init__(self, sink: SupportsWrite) -> None:
        self._sink = sink

    def write_str(self, s: str) -> None:
        self._sink.write(s)

    def write_value(self, value: Any) -> None:
        """Write a value, using its debug routine when its class has one."""
        routine = getattr(type(value), "__debug_fmt__", None)
        if routine is not None:
            routine(value, self)
        elif type(value) is list:
            self._write_items("[", value, "]")
        elif type(value) is tuple:
            self._write_items("(", value, ",)" if len(value) == 1 else ")")
        elif type(value) is dict:
            self.write_str("{")
            for index, (key, item) in enumerate(value.items()):
                if index:
                    self.write_str(", ")
                self.write_value(key)
                self.write_str(": ")
                self.write_value(item)
            self.write_str("}")
        else:
            self.write_str(repr(value))

    def _write_items(self, open_: str, items: Any, close: str) -> None:
        self.write_str(open_)
        for index, item in enumerate(items):
            if index:
                self.write_str(", ")
            self.write_value(item)
        self.write_str(close)

    def debug_struct(self, name: str) -> "DebugStruct":
        return DebugStruct(self, name)

    def debug_tuple(self, name: str) -> "DebugTuple":
        return DebugTuple(self, name)


class DebugStruct:
    """Builds ``Name { a: 1, b: 2 }``, or just ``Name`` without fields."""

    def __init__(self, fmt: Formatter, name: str) -> None:
        self._fmt = fmt
        self._has_fields = False
        fmt.write_str(name)

    def field(self, name: str, value: Any) -> "DebugStruct":
        self._fmt.write_str(", " if self._has_fields else " { ")
        self._fmt.write_str(f"{name}: ")
        self._fmt.write_value(value)
        self._has_fields = True
        return self

    def finish(self) -> None:
        if self._has_fields:
            self._fmt.write_str(" }")


class DebugTuple:
    """Builds ``Name(1, 2)``, or just ``Name`` without fields."""

    def __init__(self, fmt: Formatter, name: str) -> None:
        self._fmt = fmt
        self._has_fields = False
        fmt.write_str(name)

    def field(self, value: Any) -> "DebugTuple":
        self._fmt.write_str(", " if self._has_fields else "(")
        self._fmt.write_value(value)
        self._has_fields = True
        return self

    def finish(self) -> None:
        if self._has_fields:
            self._fmt.write_str(")")


def debug_format(value: Any) -> str:
    """Render a value's debug representation to a string."""
    buf = StringIO()
    Formatter(buf).write_value(value)
    return buf.getvalue()


def _debug_repr(self: Any) -> str:
    return debug_format(self)


def install(routine: DebugRoutine, *classes: type) -> None:
    """Attach a generated routine to classes, also replacing their repr()."""
    for cls in classes:
        cls.__debug_fmt__ = routine  # type: ignore[attr-defined]
        cls.__repr__ = _debug_repr  # type: ignore[method-assign]
