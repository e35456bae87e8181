"""
Error types for APL lexing, parsing, and evaluation.

Every error carries a human-readable message and, where one is known, the
zero-based source position it refers to. Positions are rendered 1-based.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apl.core.position import Position, Span


class AplError(Exception):
    """Base exception for all APL errors."""

    def __init__(self, message: str, position: Position | None = None):
        self.message = message
        self.position = position
        self.source: str | None = None
        super().__init__(message)

    def __str__(self) -> str:
        return self._format_message()

    def _format_message(self) -> str:
        """Format error message with position and source if available."""
        text = self.message
        if self.position is not None:
            text = f"{text} at {self.position}"
        if self.source is not None:
            text = f"{text} in {self.source}"
        return text

    @property
    def line(self) -> int | None:
        """1-indexed line of the error, if known."""
        return self.position.line + 1 if self.position is not None else None

    @property
    def column(self) -> int | None:
        """1-indexed column of the error, if known."""
        return self.position.column + 1 if self.position is not None else None


class LexError(AplError):
    """
    Raised when no lexical pattern matches at the cursor.

    The whole tokenization is aborted; no partial token list is returned.
    """

    def __init__(self, message: str, character: str, position: Position | None = None):
        self.character = character
        super().__init__(message, position)


class ParseError(AplError):
    """
    Raised when the token sequence violates the grammar.

    Examples:
    - Missing closing bracket
    - Missing statement separator
    - Unexpected token
    - Unexpected end of input
    """

    pass


class EvalError(AplError):
    """
    Raised when a statement cannot be evaluated.

    Examples:
    - Unknown identifier or built-in
    - Duplicate declaration
    - Assignment to a non-mutable cell
    - Null operand in arithmetic
    """

    pass


class ResourceNotFoundError(EvalError):
    """Raised when an import target resolves neither locally nor remotely."""

    def __init__(self, message: str, address: str, position: Position | None = None):
        self.address = address
        super().__init__(message, position)


class ImportCycleError(EvalError):
    """Raised when a source imports itself, directly or through other sources."""

    def __init__(self, message: str, chain: list[str], position: Position | None = None):
        self.chain = chain
        super().__init__(message, position)


def make_lex_error(character: str, position: Position) -> LexError:
    """Helper to create a LexError for an unidentified character."""
    return LexError(f"Unidentified term {character!r}", character, position)


def make_parse_error(message: str, span: Span | None = None) -> ParseError:
    """
    Helper to create a ParseError located at the beginning of a span.

    Args:
        message: Error description
        span: Optional span the error refers to

    Returns:
        ParseError with position attached
    """
    return ParseError(message, span.begin if span is not None else None)


def make_eval_error(message: str, span: Span | None = None) -> EvalError:
    """Helper to create an EvalError located at the beginning of a span."""
    return EvalError(message, span.begin if span is not None else None)
