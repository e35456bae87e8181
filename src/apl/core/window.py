"""
Windowed cursor over a token buffer.

A window is a view of the token list restricted to the index range
``[begin, end)``. Sub-windows look at the same buffer and share the same
position counter as the window they were opened from, so the parser keeps
one notion of "current token" across nested parses while each nested parse
is kept from reading outside its range.
"""

from __future__ import annotations

from collections.abc import Sequence

from apl.core.lexer import Token
from apl.core.position import Position, Span


class _Counter:
    """Mutable index shared by a window and all its sub-windows."""

    __slots__ = ("value",)

    def __init__(self, value: int = 0) -> None:
        self.value = value


class TokenWindow:
    """A bounded, shared-cursor view over a token buffer."""

    def __init__(
        self,
        tokens: Sequence[Token],
        begin: int = 0,
        end: int | None = None,
        span: Span | None = None,
        counter: _Counter | None = None,
    ) -> None:
        self._tokens = tokens
        self.begin = max(begin, 0)
        self.end = len(tokens) if end is None else min(end, len(tokens))
        self._counter = counter if counter is not None else _Counter(self.begin)
        self.span = span if span is not None else _buffer_span(tokens)

    @property
    def index(self) -> int:
        return self._counter.value

    @index.setter
    def index(self, value: int) -> None:
        self._counter.value = value

    @property
    def in_range(self) -> bool:
        """True while the shared cursor points inside this window."""
        return self.begin <= self.index < self.end

    @property
    def token(self) -> Token:
        """The token under the cursor. Only valid while ``in_range``."""
        if not self.in_range:
            raise IndexError(f"Cursor {self.index} outside window [{self.begin}, {self.end})")
        return self._tokens[self.index]

    def token_at(self, index: int) -> Token:
        """A token of the underlying buffer, for bracket scanning."""
        return self._tokens[index]

    def advance(self) -> None:
        self.index += 1

    def subwindow(self, begin: int, end: int, span: Span | None = None) -> TokenWindow:
        """Open a narrower window sharing this window's cursor."""
        return TokenWindow(
            self._tokens,
            begin=begin,
            end=end,
            span=span if span is not None else self.span,
            counter=self._counter,
        )

    def __repr__(self) -> str:
        return f"TokenWindow([{self.begin}, {self.end}), index={self.index})"


def _buffer_span(tokens: Sequence[Token]) -> Span:
    """Span from the first token's start to the last token's end."""
    if not tokens:
        return Span.at(Position())
    return Span.cover(tokens[0].span, tokens[-1].span)
