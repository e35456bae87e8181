"""
Interpreter facade: text → tokens → trees → evaluation effects.

An Interpreter owns all mutable state (symbol table, built-ins, import
stack), so separate instances never observe each other's declarations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from apl.core.builtins import Builtin, default_builtins
from apl.core.config import InterpreterConfig
from apl.core.errors import AplError, ImportCycleError
from apl.core.evaluator import Evaluator
from apl.core.lexer import Token
from apl.core.lexer import tokenize as _tokenize
from apl.core.nodes import Node, Value
from apl.core.parser import parse as _parse
from apl.core.resources import Resource, ResourceResolver
from apl.core.symbols import SymbolTable

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]


class Interpreter:
    """
    Runs APL source against a private symbol table.

    Args:
        config: Interpreter settings (defaults when omitted)
        output: Receives one line of text per ``Write`` call (stdout by default)
        resolver: Resolves ``import`` targets (built from ``config`` by default)
    """

    def __init__(
        self,
        config: InterpreterConfig | None = None,
        output: OutputSink | None = None,
        resolver: ResourceResolver | None = None,
    ) -> None:
        self.config = config or InterpreterConfig()
        self.output: OutputSink = output or print
        self.resolver = resolver or ResourceResolver(self.config)
        self.symbols = SymbolTable()
        self.builtins: dict[str, Builtin] = default_builtins()
        self.evaluator = Evaluator(self)
        self._imports: list[Resource] = []

    # -- Pipeline stages --

    def tokenize(self, source: str) -> list[Token]:
        return _tokenize(source)

    def parse(self, tokens: Sequence[Token]) -> list[Node]:
        return _parse(tokens)

    def evaluate(self, trees: Iterable[Node]) -> list[Value]:
        return self.evaluator.evaluate(trees)

    def run(self, source: str) -> list[Value]:
        """
        Run source text through the whole pipeline.

        Returns:
            The value of each statement, in order.

        Raises:
            LexError, ParseError, EvalError: Nothing is evaluated when lexing
            or parsing fails; evaluation stops at the first failing statement.
        """
        return self.evaluate(self.parse(self.tokenize(source)))

    def run_file(self, path: str | Path) -> list[Value]:
        """Run a source file exactly as ``import "<path>";`` would."""
        return self.run(import_statement(path))

    # -- Imports --

    @property
    def import_chain(self) -> list[str]:
        """Addresses of the imports currently being run, outermost first."""
        return [resource.address for resource in self._imports]

    def import_resource(self, address: str) -> list[Value]:
        """
        Resolve ``address`` and run its text in this interpreter.

        Raises:
            ResourceNotFoundError: If the address cannot be resolved.
            ImportCycleError: If the resource is already being imported.
        """
        relative_to = self._imports[-1].directory if self._imports else None
        resource = self.resolver.resolve(address, relative_to)

        chain = self.import_chain
        if resource.address in chain:
            cycle = chain[chain.index(resource.address) :] + [resource.address]
            raise ImportCycleError(f"Circular import: {' -> '.join(cycle)}", cycle)

        logger.debug("Importing %s from %s", resource.address, resource.origin.value)
        self._imports.append(resource)
        try:
            return self.run(resource.text)
        except AplError as e:
            if e.source is None:
                e.source = resource.address
            raise
        finally:
            self._imports.pop()


def import_statement(path: str | Path) -> str:
    """The statement that imports ``path``, with the path quoted as a string literal."""
    escaped = str(path).replace("\\", "\\\\").replace('"', '\\"')
    return f'import "{escaped}";'
