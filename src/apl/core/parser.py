"""
Recursive descent parser for the APL scripting language.

Grammar (precedence low to high):
    program     → (assignment ";")*
    assignment  → additive (":" additive)*
    additive    → multiply (("+"|"-") multiply)*
    multiply    → vertex (("*"|"/") vertex)*
    vertex      → NUMBER | STRING | "null"
                | IDENT ["(" (assignment ("," assignment)*)? ")"]
                | ("data" | "import" | "+" | "-") vertex
                | "(" assignment ")"

Every binary level folds left-associatively. Bracketed sub-expressions are
parsed inside a sub-window of the token buffer rather than a copied slice.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence

from apl.core.errors import make_parse_error
from apl.core.lexer import Token, TokenKind, tokenize
from apl.core.nodes import (
    BinaryOperatorNode,
    IdentifierNode,
    InvocationNode,
    Node,
    UnaryOperatorNode,
    ValueNode,
)
from apl.core.position import Span
from apl.core.window import TokenWindow

logger = logging.getLogger(__name__)

BRACKET_PAIRS: dict[str, str] = {"(": ")"}

# Binary operator levels, lowest precedence first
_ASSIGNMENT_OPS = (":",)
_ADDITIVE_OPS = ("+", "-")
_MULTIPLICATIVE_OPS = ("*", "/")

_PREFIX_KEYWORDS = ("data", "import")
_PREFIX_OPERATORS = ("+", "-")


class _Parser:
    """Precedence-climbing parser over token windows."""

    # -- Binary levels --

    def parse_assignment(self, window: TokenWindow) -> Node:
        """additive (':' additive)*"""
        return self._parse_binary(window, _ASSIGNMENT_OPS, self.parse_additive)

    def parse_additive(self, window: TokenWindow) -> Node:
        """multiply (('+' | '-') multiply)*"""
        return self._parse_binary(window, _ADDITIVE_OPS, self.parse_multiply)

    def parse_multiply(self, window: TokenWindow) -> Node:
        """vertex (('*' | '/') vertex)*"""
        return self._parse_binary(window, _MULTIPLICATIVE_OPS, self.parse_vertex)

    def _parse_binary(
        self,
        window: TokenWindow,
        operators: tuple[str, ...],
        operand: Callable[[TokenWindow], Node],
    ) -> Node:
        left = operand(window)
        while window.in_range:
            token = window.token
            if not token.match(TokenKind.OPERATOR, *operators):
                break
            window.advance()
            right = operand(window)
            left = BinaryOperatorNode(
                operator=token.text,
                left=left,
                right=right,
                span=Span.cover(left.span, right.span),
            )
        return left

    # -- Vertices --

    def parse_vertex(self, window: TokenWindow) -> Node:
        """Literal, identifier, invocation, prefix operation, or bracketed expression."""
        if not window.in_range:
            raise make_parse_error("Expected expression", Span.at(window.span.end))
        token = window.token

        if token.kind == TokenKind.NUMBER:
            window.advance()
            return ValueNode(value=float(token.text), span=token.span)

        if token.kind == TokenKind.STRING:
            window.advance()
            return ValueNode(value=_decode_string(token), span=token.span)

        if token.kind == TokenKind.IDENTIFIER:
            identifier = IdentifierNode(name=token.text, span=token.span)
            window.advance()
            if window.in_range and window.token.match(TokenKind.BRACKET, "("):
                return self._parse_invocation(window, identifier)
            return identifier

        if token.kind == TokenKind.KEYWORD:
            window.advance()
            if token.text == "null":
                return ValueNode(value=None, span=token.span)
            if token.text in _PREFIX_KEYWORDS:
                return self._parse_prefix(window, token)
            raise make_parse_error(f"Unidentified keyword {token.text!r}", token.span)

        if token.kind == TokenKind.OPERATOR:
            if token.text in _PREFIX_OPERATORS:
                window.advance()
                return self._parse_prefix(window, token)
            raise make_parse_error(f"Unidentified operator {token.text!r}", token.span)

        if token.kind == TokenKind.BRACKET and token.text in BRACKET_PAIRS:
            inner = self._open_bracket(window)
            node = self.parse_assignment(inner)
            self._close_bracket(window, inner)
            return node

        raise make_parse_error(f"Unexpected token {token.text!r}", token.span)

    def _parse_prefix(self, window: TokenWindow, token: Token) -> UnaryOperatorNode:
        target = self.parse_vertex(window)
        return UnaryOperatorNode(
            operator=token.text,
            target=target,
            span=Span.cover(token.span, target.span),
        )

    def _parse_invocation(self, window: TokenWindow, identifier: IdentifierNode) -> InvocationNode:
        """IDENT '(' (assignment (',' assignment)*)? ')'"""
        inner = self._open_bracket(window)
        arguments: list[Node] = []
        while inner.in_range:
            arguments.append(self.parse_assignment(inner))
            if not inner.in_range:
                break
            separator = inner.token
            if not separator.match(TokenKind.SEPARATOR, ","):
                raise make_parse_error("Expected ','", separator.span)
            inner.advance()
            if not inner.in_range:
                raise make_parse_error("Expected expression", Span.at(inner.span.end))
        closing = self._close_bracket(window, inner)
        return InvocationNode(
            target=identifier,
            arguments=arguments,
            span=Span.cover(identifier.span, closing.span),
        )

    # -- Brackets --

    def _open_bracket(self, window: TokenWindow) -> TokenWindow:
        """
        Find the bracket matching the one under the cursor.

        Returns a sub-window covering the tokens strictly between the pair,
        with the shared cursor placed on its first token.
        """
        opening = window.token
        closing_text = BRACKET_PAIRS.get(opening.text)
        if closing_text is None:
            raise make_parse_error(f"Unable to get pair of {opening.text!r}", opening.span)

        begin = window.index + 1
        depth = 1
        for index in range(begin, window.end):
            token = window.token_at(index)
            if token.match(TokenKind.BRACKET, opening.text):
                depth += 1
            elif token.match(TokenKind.BRACKET, closing_text):
                depth -= 1
            if depth == 0:
                window.index = begin
                span = Span(begin=opening.span.end, end=token.span.begin)
                return window.subwindow(begin, index, span)

        raise make_parse_error(f"Expected {closing_text!r}", Span.at(window.span.end))

    def _close_bracket(self, window: TokenWindow, inner: TokenWindow) -> Token:
        """Step past the closing bracket once the inner window is exhausted."""
        closing = window.token_at(inner.end)
        if inner.in_range:
            raise make_parse_error(f"Expected {closing.text!r}", inner.token.span)
        window.advance()
        return closing

    # -- Statements --

    def parse_program(self, window: TokenWindow) -> list[Node]:
        """Parse ';'-terminated statements until the window is exhausted."""
        trees: list[Node] = []
        while window.in_range:
            start = window.token.span
            try:
                tree = self.parse_assignment(window)
            except RecursionError:
                raise make_parse_error("Expression is nested too deeply", start) from None
            if not window.in_range:
                raise make_parse_error("Expected ';'", Span.at(window.span.end))
            separator = window.token
            if not separator.match(TokenKind.SEPARATOR, ";"):
                raise make_parse_error("Expected ';'", separator.span)
            window.advance()
            trees.append(tree)
        return trees


def _decode_string(token: Token) -> str:
    """Decode a quoted string literal using JSON escape rules."""
    try:
        value = json.loads(token.text, strict=False)
    except json.JSONDecodeError as e:
        raise make_parse_error(f"Unable to parse string {token.text}", token.span) from e
    if not isinstance(value, str):
        raise make_parse_error(f"Unable to parse string {token.text}", token.span)
    return value


def parse(tokens: Sequence[Token]) -> list[Node]:
    """
    Parse a token sequence into one syntax tree per statement.

    Args:
        tokens: Tokens produced by :func:`apl.core.lexer.tokenize`

    Returns:
        Syntax trees in statement order.

    Raises:
        ParseError: If the tokens violate the grammar.
    """
    trees = _Parser().parse_program(TokenWindow(tokens))
    logger.debug("Parsed %d tokens into %d statements", len(tokens), len(trees))
    return trees


def parse_source(source: str) -> list[Node]:
    """Tokenize and parse source text in one step."""
    return parse(tokenize(source))
