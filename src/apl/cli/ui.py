"""
Console output helpers for the APL CLI.
"""

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from apl.core.errors import AplError
from apl.core.lexer import Token

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "error": Style(color="red", bold=True),
    "muted": Style(color="bright_black"),
    "prompt": Style(color="bright_cyan"),
    "header": Style(color="cyan", bold=True),
}


def print_error(error: AplError) -> None:
    """Report an error without stopping the caller."""
    err_console.print(Text(f"✗ {error}", style=STYLES["error"]), soft_wrap=True)


def print_muted(message: str) -> None:
    """Echo input the CLI generated on the user's behalf."""
    console.print(Text(message, style=STYLES["muted"]), soft_wrap=True)


def print_tokens(tokens: list[Token]) -> None:
    """Show tokens in a table: kind, text, and 1-based begin/end positions."""
    table = Table(header_style=STYLES["header"])
    table.add_column("Kind")
    table.add_column("Text")
    table.add_column("Begin")
    table.add_column("End")
    for token in tokens:
        begin = token.span.begin
        end = token.span.end
        table.add_row(
            token.kind.value,
            Text(token.text),
            f"{begin.line + 1}:{begin.column + 1}",
            f"{end.line + 1}:{end.column + 1}",
        )
    console.print(table)
