"""
Syntax tree for the APL scripting language.

Every node carries the span of source it was parsed from. A parent's span
covers the spans of its children. Nodes are immutable and never shared.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from apl.core.position import Span

# A runtime value: a number, a piece of text, or null
Value = float | str | None


class ValueNode(BaseModel):
    """A literal value or the ``null`` literal."""

    value: Value = Field(default=None, description="The literal value")
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.value is None:
            return "null"
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return str(self.value)


class IdentifierNode(BaseModel):
    """A reference to a named storage cell."""

    name: str
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class InvocationNode(BaseModel):
    """A built-in invocation: Target(arg1, arg2, ...)."""

    target: IdentifierNode
    arguments: list[Node] = Field(default_factory=list)
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.arguments)
        return f"{self.target}({args_str})"


class UnaryOperatorNode(BaseModel):
    """
    Prefix operation: ``+``/``-`` sign, ``data`` declaration, or ``import``.
    """

    operator: str
    target: Node
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.operator}({self.target})"


class BinaryOperatorNode(BaseModel):
    """Infix operation: arithmetic or ``:`` assignment."""

    operator: str
    left: Node
    right: Node
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Left spines can be long; render them without recursing
        links: list[BinaryOperatorNode] = []
        node: Node = self
        while isinstance(node, BinaryOperatorNode):
            links.append(node)
            node = node.left
        text = str(node)
        for link in reversed(links):
            text = f"({text} {link.operator} {link.right})"
        return text


Node = ValueNode | IdentifierNode | InvocationNode | UnaryOperatorNode | BinaryOperatorNode

# Rebuild models for recursive forward references
InvocationNode.model_rebuild()
UnaryOperatorNode.model_rebuild()
BinaryOperatorNode.model_rebuild()
