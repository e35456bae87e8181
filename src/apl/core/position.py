"""
Source positions and spans.

Positions are zero-based internally and rendered 1-based for diagnostics.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """A (line, column) location in source text, zero-based."""

    line: int = Field(default=0, ge=0, description="Zero-based line")
    column: int = Field(default=0, ge=0, description="Zero-based column")

    model_config = ConfigDict(frozen=True)

    def advance(self, text: str) -> Position:
        """Return the position reached after consuming ``text``."""
        line = self.line
        column = self.column
        for char in text:
            if char == "\n":
                line += 1
                column = 0
            else:
                column += 1
        return Position(line=line, column=column)

    def __lt__(self, other: Position) -> bool:
        return (self.line, self.column) < (other.line, other.column)

    def __le__(self, other: Position) -> bool:
        return (self.line, self.column) <= (other.line, other.column)

    def __str__(self) -> str:
        return f"line {self.line + 1} column {self.column + 1}"


class Span(BaseModel):
    """A begin/end pair of positions attached to a token or syntax node."""

    begin: Position
    end: Position

    model_config = ConfigDict(frozen=True)

    @classmethod
    def at(cls, position: Position) -> Span:
        """An empty span located at a single position."""
        return cls(begin=position, end=position)

    @classmethod
    def cover(cls, first: Span, last: Span) -> Span:
        """The span running from the start of ``first`` to the end of ``last``."""
        return cls(begin=first.begin, end=last.end)

    def __str__(self) -> str:
        return f"from {self.begin} to {self.end}"
