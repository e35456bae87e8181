"""
APL CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform

import typer
from pydantic import ValidationError

from apl.core.config import InterpreterConfig, load_config

logger = logging.getLogger(__name__)


def get_version() -> str:
    """Get APL version from package metadata."""
    from apl import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"APL {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def prepare(log_level: str | None) -> InterpreterConfig:
    """Load configuration and configure logging for a command."""
    config = load_config()
    if log_level:
        try:
            config = InterpreterConfig.model_validate({**config.model_dump(), "log_level": log_level})
        except ValidationError:
            logger.warning("Unknown --log-level value '%s', using %s", log_level, config.log_level)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return config
