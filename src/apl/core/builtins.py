"""
Built-in invokable operations.

A built-in receives the interpreter, its unevaluated argument nodes and the
span of the invocation, and returns the invocation's value.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from apl.core.nodes import Node, Value
from apl.core.position import Span

if TYPE_CHECKING:
    from apl.core.interpreter import Interpreter

Builtin = Callable[["Interpreter", Sequence[Node], Span], Value]

# Integral numbers at or beyond this magnitude keep float notation (1e+16)
_INTEGRAL_LIMIT = 1e16


def format_value(value: Value) -> str:
    """Render a value the way ``Write`` prints it."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return str(int(value))
    return repr(value)


def builtin_write(interpreter: Interpreter, arguments: Sequence[Node], span: Span) -> Value:
    """Write(args...): emit one line holding every argument, newline-joined."""
    values = [interpreter.evaluator.as_value(argument) for argument in arguments]
    interpreter.output("\n".join(format_value(v) for v in values))
    return None


def default_builtins() -> dict[str, Builtin]:
    """Built-ins available in every fresh interpreter."""
    return {
        "Write": builtin_write,
    }
