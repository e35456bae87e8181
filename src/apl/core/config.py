"""
Interpreter configuration.

Settings come from environment variables, falling back to defaults:

    APL_SOURCE_EXTENSION  extension required for local imports (default ".apl")
    APL_IMPORT_TIMEOUT    seconds allowed for a remote import (default 10)
    APL_IMPORT_PATH       os.pathsep-separated directories searched for
                          relative local imports (default: working directory)
    APL_LOG_LEVEL         logging level name used by the command line

Usage:
    from apl.core.config import load_config

    config = load_config()
    config.import_timeout  # 10.0
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

SOURCE_EXTENSION_VAR = "APL_SOURCE_EXTENSION"
IMPORT_TIMEOUT_VAR = "APL_IMPORT_TIMEOUT"
IMPORT_PATH_VAR = "APL_IMPORT_PATH"
LOG_LEVEL_VAR = "APL_LOG_LEVEL"

_DEFAULT_EXTENSION = ".apl"
_DEFAULT_TIMEOUT = 10.0
_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class InterpreterConfig(BaseModel):
    """Settings shared by the interpreter, its resolver, and the CLI."""

    source_extension: str = Field(
        default=_DEFAULT_EXTENSION, description="Extension required for local imports"
    )
    import_timeout: float = Field(
        default=_DEFAULT_TIMEOUT, gt=0, description="Remote import timeout in seconds"
    )
    import_search_paths: list[Path] = Field(
        default_factory=lambda: [Path.cwd()],
        description="Directories searched for relative local imports",
    )
    log_level: str = Field(default=_DEFAULT_LOG_LEVEL, description="Logging level name")

    model_config = ConfigDict(frozen=True)

    @field_validator("source_extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("."):
            value = "." + value
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value


def load_config(environ: Mapping[str, str] | None = None) -> InterpreterConfig:
    """Build configuration from environment variables.

    Malformed values are ignored with a warning and the default is kept.
    """
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    extension = env.get(SOURCE_EXTENSION_VAR, "").strip()
    if extension:
        values["source_extension"] = extension

    timeout = env.get(IMPORT_TIMEOUT_VAR, "").strip()
    if timeout:
        try:
            parsed = float(timeout)
        except ValueError:
            parsed = 0.0
        if parsed > 0:
            values["import_timeout"] = parsed
        else:
            logger.warning("Invalid %s value '%s', using default", IMPORT_TIMEOUT_VAR, timeout)

    search_path = env.get(IMPORT_PATH_VAR, "").strip()
    if search_path:
        values["import_search_paths"] = [Path(p) for p in search_path.split(os.pathsep) if p]

    level = env.get(LOG_LEVEL_VAR, "").strip().upper()
    if level:
        if level in _LOG_LEVELS:
            values["log_level"] = level
        else:
            logger.warning("Unknown %s value '%s', using default", LOG_LEVEL_VAR, level)

    return InterpreterConfig(**values)
