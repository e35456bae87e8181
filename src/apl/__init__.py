"""
APL - a small expression-oriented scripting language.

Semicolon-terminated statements over a single mutable namespace, with
numeric and text values, declarations, assignments, built-in invocations,
and source imports.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import AplError, EvalError, Interpreter, LexError, ParseError


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("apl-lang")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "AplError",
    "EvalError",
    "Interpreter",
    "LexError",
    "ParseError",
]
