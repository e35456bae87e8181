"""Tests for environment-driven configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from apl.core.config import InterpreterConfig, load_config


class TestDefaults:
    def test_defaults(self) -> None:
        config = load_config({})
        assert config.source_extension == ".apl"
        assert config.import_timeout == 10.0
        assert config.import_search_paths == [Path.cwd()]
        assert config.log_level == "WARNING"

    def test_config_is_frozen(self) -> None:
        config = InterpreterConfig()
        with pytest.raises(ValidationError):
            config.import_timeout = 1.0  # type: ignore[misc]


class TestEnvironment:
    def test_reads_all_variables(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        config = load_config(
            {
                "APL_SOURCE_EXTENSION": "SRC",
                "APL_IMPORT_TIMEOUT": "2.5",
                "APL_IMPORT_PATH": os.pathsep.join([str(tmp_path), str(other)]),
                "APL_LOG_LEVEL": "debug",
            }
        )
        assert config.source_extension == ".src"
        assert config.import_timeout == 2.5
        assert config.import_search_paths == [tmp_path, other]
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_invalid_timeout_falls_back(
        self, value: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="apl.core.config"):
            config = load_config({"APL_IMPORT_TIMEOUT": value})
        assert config.import_timeout == 10.0
        assert "APL_IMPORT_TIMEOUT" in caplog.text

    def test_unknown_log_level_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="apl.core.config"):
            config = load_config({"APL_LOG_LEVEL": "chatty"})
        assert config.log_level == "WARNING"
        assert "APL_LOG_LEVEL" in caplog.text

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APL_SOURCE_EXTENSION", ".txt")
        assert load_config().source_extension == ".txt"
