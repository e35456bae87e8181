"""
Lexer for the APL scripting language.

Converts a source string into a sequence of typed, position-stamped tokens.
Lexical patterns are tried in a fixed priority order, each anchored at the
cursor; the first one that matches wins.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

from apl.core.errors import make_lex_error
from apl.core.position import Position, Span

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types in the APL language."""

    NUMBER = "Number"
    STRING = "String"
    IDENTIFIER = "Identifier"
    KEYWORD = "Keyword"
    OPERATOR = "Operator"
    BRACKET = "Bracket"
    SEPARATOR = "Separator"


KEYWORDS = frozenset({"data", "null", "import"})

# (kind, pattern) in priority order; a kind of None marks discarded text
_PATTERNS: list[tuple[TokenKind | None, re.Pattern[str]]] = [
    (None, re.compile(r"\s+")),
    (TokenKind.STRING, re.compile(r'"(?:[^"\\\n]|\\.)*"')),
    (TokenKind.NUMBER, re.compile(r"\d+(?:\.\d+)?")),
    (TokenKind.OPERATOR, re.compile(r"[+\-*/:]")),
    (TokenKind.IDENTIFIER, re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
    (TokenKind.BRACKET, re.compile(r"[()]")),
    (TokenKind.SEPARATOR, re.compile(r"[;,]")),
]


@dataclass(frozen=True)
class Token:
    """
    A single token of source text.

    Attributes:
        kind: Type of token
        text: Exact source text of the token (string literals keep their quotes)
        span: Source range covered by the token
    """

    kind: TokenKind
    text: str
    span: Span

    def match(self, kind: TokenKind, *texts: str) -> bool:
        """True when the token has ``kind`` and, if given, one of ``texts``."""
        if self.kind != kind:
            return False
        return not texts or self.text in texts

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.text!r}, {self.span.begin})"


def tokenize(source: str) -> list[Token]:
    """
    Tokenize APL source text.

    Args:
        source: Source text

    Returns:
        List of tokens in source order (whitespace discarded)

    Raises:
        LexError: If no pattern matches at some point of the input
    """
    tokens: list[Token] = []
    index = 0
    position = Position()
    length = len(source)

    while index < length:
        for kind, pattern in _PATTERNS:
            match = pattern.match(source, index)
            if match is None:
                continue
            text = match.group(0)
            end = position.advance(text)
            if kind is not None:
                if kind == TokenKind.IDENTIFIER and text in KEYWORDS:
                    kind = TokenKind.KEYWORD
                tokens.append(Token(kind, text, Span(begin=position, end=end)))
            index = match.end()
            position = end
            break
        else:
            raise make_lex_error(source[index], position)

    logger.debug("Tokenized %d characters into %d tokens", length, len(tokens))
    return tokens
