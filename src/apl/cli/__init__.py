"""
APL CLI Package.

- run.py: run files, interactive REPL
- dump.py: token and syntax tree dumps
- ui.py: console output helpers
- utils.py: version and configuration helpers
"""

import typer

from apl.cli.dump import tokens_command, tree_command
from apl.cli.run import repl_command, run_command
from apl.cli.utils import get_version, version_callback

app = typer.Typer(
    help="APL – a small expression-oriented scripting language",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """APL CLI main callback for global options."""
    pass


app.command(name="run")(run_command)
app.command(name="repl")(repl_command)
app.command(name="tokens")(tokens_command)
app.command(name="tree")(tree_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main", "get_version", "version_callback"]
