"""
Debugging commands: show the tokens or syntax trees of a source string.
"""

import typer

from apl.cli.ui import print_error, print_tokens
from apl.core.errors import AplError
from apl.core.lexer import tokenize
from apl.core.parser import parse


def tokens_command(
    source: str = typer.Argument(..., help="Source text to tokenize"),
) -> None:
    """Print the token list of SOURCE."""
    try:
        tokens = tokenize(source)
    except AplError as e:
        print_error(e)
        raise typer.Exit(code=1) from e
    print_tokens(tokens)


def tree_command(
    source: str = typer.Argument(..., help="Source text to parse"),
) -> None:
    """Print one syntax tree per statement of SOURCE."""
    try:
        trees = parse(tokenize(source))
    except AplError as e:
        print_error(e)
        raise typer.Exit(code=1) from e
    for tree in trees:
        typer.echo(str(tree))
