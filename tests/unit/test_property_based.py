"""
Property-based tests for the APL pipeline.

Uses Hypothesis to check arithmetic against native floats and to make sure
arbitrary input only ever fails with the language's own error types.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from apl.core.errors import AplError
from apl.core.interpreter import Interpreter
from apl.core.lexer import tokenize
from apl.core.parser import parse_source

# =============================================================================
# Strategy Definitions
# =============================================================================

numbers = st.integers(min_value=0, max_value=10**6)
positive_numbers = st.integers(min_value=1, max_value=10**6)

# Text built from the language's own alphabet, plus a few strays
source_text = st.text(alphabet='0123456789.+-*/:();, "xyzdataWrite\n\\#', max_size=40)


def quiet_interpreter() -> Interpreter:
    return Interpreter(output=lambda line: None)


# =============================================================================
# Arithmetic
# =============================================================================


@given(a=numbers, b=numbers, c=numbers)
def test_precedence_matches_python(a: int, b: int, c: int) -> None:
    result = quiet_interpreter().run(f"{a} + {b} * {c}; ({a} + {b}) * {c};")
    assert result == [float(a) + float(b) * float(c), (float(a) + float(b)) * float(c)]


@given(a=numbers, b=numbers)
def test_addition_and_multiplication_commute(a: int, b: int) -> None:
    result = quiet_interpreter().run(f"{a} + {b}; {b} + {a}; {a} * {b}; {b} * {a};")
    assert result[0] == result[1]
    assert result[2] == result[3]


@given(a=numbers, b=numbers, c=numbers)
def test_subtraction_is_left_associative(a: int, b: int, c: int) -> None:
    assert quiet_interpreter().run(f"{a} - {b} - {c};") == [(float(a) - float(b)) - float(c)]


@given(a=numbers, b=positive_numbers, c=positive_numbers)
def test_division_is_left_associative(a: int, b: int, c: int) -> None:
    assert quiet_interpreter().run(f"{a} / {b} / {c};") == [(float(a) / float(b)) / float(c)]


@given(whole=numbers, fraction=st.integers(min_value=0, max_value=999))
def test_decimal_literals(whole: int, fraction: int) -> None:
    literal = f"{whole}.{fraction:03d}"
    assert quiet_interpreter().run(f"{literal};") == [float(literal)]


@given(value=numbers)
def test_assignment_round_trips(value: int) -> None:
    assert quiet_interpreter().run(f"data x; x : {value}; x;")[-1] == float(value)


# =============================================================================
# Robustness
# =============================================================================


@given(source=source_text)
@settings(max_examples=300)
def test_tokenize_fails_only_with_lex_errors(source: str) -> None:
    try:
        tokens = tokenize(source)
    except AplError:
        return
    for token in tokens:
        assert token.span.begin <= token.span.end


@given(source=source_text)
@settings(max_examples=300)
def test_parse_fails_only_with_language_errors(source: str) -> None:
    try:
        parse_source(source)
    except AplError:
        pass
