"""
Run and REPL commands.

Both commands are thin callers of the core pipeline: they hand it one
source unit at a time, report any error, and carry on with the next one.
"""

from pathlib import Path

import typer
from rich.text import Text

from apl.cli.ui import STYLES, console, print_error, print_muted
from apl.cli.utils import prepare
from apl.core.errors import AplError
from apl.core.interpreter import Interpreter, import_statement

LOG_LEVEL_OPTION = typer.Option(
    None, "--log-level", "-l", help="Logging level (default: APL_LOG_LEVEL or WARNING)"
)


def _import_files(interpreter: Interpreter, files: list[Path]) -> int:
    """Import each file in order; return the number that failed."""
    failures = 0
    for file in files:
        statement = import_statement(file)
        print_muted(statement)
        try:
            interpreter.run(statement)
        except AplError as e:
            print_error(e)
            failures += 1
    return failures


def run_command(
    files: list[Path] = typer.Argument(..., help="Source files to run, in order"),
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """Run source files in one shared interpreter."""
    config = prepare(log_level)
    interpreter = Interpreter(config, output=typer.echo)
    if _import_files(interpreter, files):
        raise typer.Exit(code=1)


def repl_command(
    files: list[Path] = typer.Argument(None, help="Source files to import before the prompt"),
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """Read statements line by line until end of input."""
    config = prepare(log_level)
    interpreter = Interpreter(config, output=typer.echo)
    _import_files(interpreter, files or [])

    while True:
        try:
            line = console.input(Text("> ", style=STYLES["prompt"]))
        except EOFError:
            break
        if not line.strip():
            continue
        try:
            interpreter.run(line)
        except AplError as e:
            print_error(e)
