"""Runtime support for generated debug formatting routines."""

from .formatter import DebugStruct, DebugTuple, Formatter, debug_format, install

__all__ = ["DebugStruct", "DebugTuple", "Formatter", "debug_format", "install"]
