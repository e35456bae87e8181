"""
Tree-walking evaluator for the APL scripting language.

Each node can be evaluated *as a value* or *as an identifier*. Most
operators want values; ``:`` and ``data`` want their operand resolved as a
name instead. A node asked for a capability it does not have raises an
EvalError.
"""

from __future__ import annotations

import logging
import math
import operator
from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import TYPE_CHECKING

from apl.core.errors import (
    EvalError,
    ImportCycleError,
    ResourceNotFoundError,
    make_eval_error,
)
from apl.core.nodes import (
    BinaryOperatorNode,
    IdentifierNode,
    InvocationNode,
    Node,
    UnaryOperatorNode,
    Value,
    ValueNode,
)

if TYPE_CHECKING:
    from apl.core.interpreter import Interpreter

logger = logging.getLogger(__name__)


class EvalTarget(StrEnum):
    """What the caller needs a node to evaluate to."""

    VALUE = "value"
    IDENTIFIER = "identifier"


_NODE_NAMES: dict[type, str] = {
    ValueNode: "value",
    IdentifierNode: "identifier",
    InvocationNode: "invocation",
    UnaryOperatorNode: "unary operator",
    BinaryOperatorNode: "binary operator",
}


class Evaluator:
    """Evaluates syntax trees against an interpreter's state."""

    def __init__(self, interpreter: Interpreter) -> None:
        self.interpreter = interpreter

    def evaluate(self, trees: Iterable[Node]) -> list[Value]:
        """
        Evaluate statements in order, returning each statement's value.

        Raises:
            EvalError: On the first failing statement; later statements are not run.
        """
        values: list[Value] = []
        for tree in trees:
            try:
                values.append(self.as_value(tree))
            except RecursionError:
                raise make_eval_error("Expression is nested too deeply", tree.span) from None
        return values

    def as_value(self, node: Node) -> Value:
        result = self.evaluate_node(node, EvalTarget.VALUE)
        assert not isinstance(result, IdentifierNode)
        return result

    def as_identifier(self, node: Node) -> IdentifierNode:
        result = self.evaluate_node(node, EvalTarget.IDENTIFIER)
        assert isinstance(result, IdentifierNode)
        return result

    def evaluate_node(self, node: Node, target: EvalTarget) -> Value | IdentifierNode:
        """Dispatch evaluation to the handler for the node's kind."""
        if isinstance(node, ValueNode):
            if target == EvalTarget.VALUE:
                return node.value
            raise _unsupported(node, target)

        if isinstance(node, IdentifierNode):
            if target == EvalTarget.VALUE:
                return self._read(node)
            return node

        if isinstance(node, InvocationNode):
            if target == EvalTarget.VALUE:
                return self._invoke(node)
            raise _unsupported(node, target)

        if isinstance(node, UnaryOperatorNode):
            return self._evaluate_unary(node, target)

        if isinstance(node, BinaryOperatorNode):
            return self._evaluate_binary(node, target)

        raise EvalError(f"Unknown node type: {type(node).__name__}")

    # -- Identifiers and invocations --

    def _read(self, node: IdentifierNode) -> Value:
        cell = self.interpreter.symbols.get(node.name)
        if cell is None:
            raise make_eval_error(f"Identifier {node.name!r} does not exist", node.span)
        return cell.value

    def _invoke(self, node: InvocationNode) -> Value:
        builtin = self.interpreter.builtins.get(node.target.name)
        if builtin is None:
            raise make_eval_error(f"Function {node.target.name!r} does not exist", node.span)
        return builtin(self.interpreter, node.arguments, node.span)

    # -- Unary operators --

    def _evaluate_unary(
        self, node: UnaryOperatorNode, target: EvalTarget
    ) -> Value | IdentifierNode:
        if node.operator in ("+", "-"):
            if target != EvalTarget.VALUE:
                raise _unsupported(node, target)
            signed = BinaryOperatorNode(
                operator=node.operator,
                left=ValueNode(value=0.0, span=node.span),
                right=node.target,
                span=node.span,
            )
            return self.as_value(signed)

        if node.operator == "data":
            identifier = self._declare(node)
            if target == EvalTarget.IDENTIFIER:
                return identifier
            return self.as_value(identifier)

        if node.operator == "import":
            if target != EvalTarget.VALUE:
                raise _unsupported(node, target)
            self._import(node)
            return None

        raise make_eval_error(f"Unidentified {node.operator!r} operator", node.span)

    def _declare(self, node: UnaryOperatorNode) -> IdentifierNode:
        identifier = self.as_identifier(node.target)
        if self.interpreter.symbols.declare(identifier.name) is None:
            raise make_eval_error(f"Identifier {identifier.name!r} already exists", node.span)
        return identifier

    def _import(self, node: UnaryOperatorNode) -> None:
        address = self.as_value(node.target)
        if not isinstance(address, str):
            raise make_eval_error(
                f"Import target must be text, got {_describe(address)}", node.target.span
            )
        try:
            self.interpreter.import_resource(address)
        except (ResourceNotFoundError, ImportCycleError) as e:
            if e.position is None:
                e.position = node.span.begin
            raise

    # -- Binary operators --

    def _evaluate_binary(
        self, node: BinaryOperatorNode, target: EvalTarget
    ) -> Value | IdentifierNode:
        if node.operator == ":":
            identifier = self._assign(node)
            if target == EvalTarget.IDENTIFIER:
                return identifier
            return self.as_value(identifier)

        if target != EvalTarget.VALUE:
            raise _unsupported(node, target)
        if node.operator not in _ARITHMETIC:
            raise make_eval_error(f"Unidentified {node.operator!r} operator", node.span)

        # Left spine is folded iteratively; 1 + 1 + ... does not recurse per operator
        chain: list[BinaryOperatorNode] = []
        current: Node = node
        while isinstance(current, BinaryOperatorNode) and current.operator in _ARITHMETIC:
            chain.append(current)
            current = current.left

        result = self._operand(chain[-1], current)
        for link in reversed(chain):
            right = self._operand(link, link.right)
            result = _ARITHMETIC[link.operator](result, right)
        return result

    def _operand(self, node: BinaryOperatorNode, operand: Node) -> float:
        value = self.as_value(operand)
        if value is None:
            raise make_eval_error(
                f"Operator {node.operator!r} cannot be applied to null operand", node.span
            )
        if not isinstance(value, float):
            raise make_eval_error(
                f"Operator {node.operator!r} cannot be applied to {_describe(value)} operand",
                node.span,
            )
        return value

    def _assign(self, node: BinaryOperatorNode) -> IdentifierNode:
        value = self.as_value(node.right)
        identifier = self.as_identifier(node.left)
        cell = self.interpreter.symbols.get(identifier.name)
        if cell is None:
            raise make_eval_error(f"Identifier {identifier.name!r} does not exist", node.span)
        if not cell.mutable:
            raise make_eval_error(f"Identifier {identifier.name!r} is non-mutable", node.span)
        cell.value = value
        logger.debug("Assigned %s : %r", identifier.name, value)
        return identifier


def _divide(left: float, right: float) -> float:
    """IEEE 754 division: a zero divisor yields an infinity or NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


_ARITHMETIC: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}


def _describe(value: Value) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return "text"
    return "number"


def _unsupported(node: Node, target: EvalTarget) -> EvalError:
    kind = _NODE_NAMES.get(type(node), type(node).__name__)
    return make_eval_error(f"Unable to evaluate {target.value} from {kind}", node.span)
