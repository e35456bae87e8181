"""Shared pytest fixtures for APL tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from apl.core.config import InterpreterConfig
from apl.core.interpreter import Interpreter


@pytest.fixture
def output_lines() -> list[str]:
    """Lines emitted by Write(), in order."""
    return []


@pytest.fixture
def config(tmp_path: Path) -> InterpreterConfig:
    """Configuration whose local imports resolve inside the test's temp dir."""
    return InterpreterConfig(import_search_paths=[tmp_path])


@pytest.fixture
def interpreter(config: InterpreterConfig, output_lines: list[str]) -> Interpreter:
    """A fresh interpreter writing into ``output_lines``."""
    return Interpreter(config, output=output_lines.append)


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a source file under the temp dir and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
