"""
APL core pipeline.

Lexer, parser, evaluator, and interpreter state for the APL scripting
language.

Usage:
    from apl.core import Interpreter

    interpreter = Interpreter()
    interpreter.run("data x; x : 2 + 3 * 4; x;")
    # [None, 14.0, 14.0]
"""

from apl.core.errors import (
    AplError,
    EvalError,
    ImportCycleError,
    LexError,
    ParseError,
    ResourceNotFoundError,
)
from apl.core.interpreter import Interpreter
from apl.core.lexer import Token, TokenKind, tokenize
from apl.core.parser import parse, parse_source

__all__ = [
    "AplError",
    "EvalError",
    "ImportCycleError",
    "Interpreter",
    "LexError",
    "ParseError",
    "ResourceNotFoundError",
    "Token",
    "TokenKind",
    "parse",
    "parse_source",
    "tokenize",
]
