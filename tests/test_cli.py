"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from modelsift.cli import _resolve_inputs, _setup_logging, app
from modelsift.config import LIBRARY_ENV_VAR


runner = CliRunner()


@pytest.fixture
def library(tmp_path: Path) -> Path:
    root = tmp_path / "loras"
    root.mkdir()
    for name in (
        "model_HN.safetensors",
        "model_LN.safetensors",
        "red_car.safetensors",
        "blue_truck.safetensors",
        "preview.png",
    ):
        (root / name).write_text("dummy")
    return root


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("modelsift.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("modelsift.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestResolveInputs:
    """Tests for _resolve_inputs helper."""

    def test_explicit_inputs(self, tmp_path: Path) -> None:
        """Existing inputs are returned unchanged."""
        assert _resolve_inputs([tmp_path]) == [tmp_path]

    def test_defaults_to_configured_library(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Without inputs the configured library is used."""
        monkeypatch.setenv(LIBRARY_ENV_VAR, str(tmp_path))

        assert _resolve_inputs(None) == [tmp_path]

    def test_missing_path(self, tmp_path: Path) -> None:
        """Missing paths are rejected."""
        with pytest.raises(typer.BadParameter):
            _resolve_inputs([tmp_path / "missing"])


class TestClassifyCommand:
    """Tests for the classify command."""

    def test_classify_prints_key_and_label(self) -> None:
        """Key and label are shown for each name."""
        result = runner.invoke(app, ["classify", "model_HN.safetensors", "plain.pt"])

        assert result.exit_code == 0
        assert "model" in result.stdout
        assert "High" in result.stdout
        assert "plain" in result.stdout

    def test_classify_verbose(self) -> None:
        """Verbose flag is accepted."""
        result = runner.invoke(app, ["classify", "model_LN", "-v"])

        assert result.exit_code == 0
        assert "Low" in result.stdout


class TestGroupCommand:
    """Tests for the group command."""

    def test_group_library(self, library: Path) -> None:
        """High/Low halves are reported as one item."""
        result = runner.invoke(app, ["group", str(library)])

        assert result.exit_code == 0
        assert "Files: 4, items: 3, merged: 1" in result.stdout

    def test_group_no_models(self, tmp_path: Path) -> None:
        """Shows warning when no model files are found."""
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()

        result = runner.invoke(app, ["group", str(empty_dir)])

        assert result.exit_code == 0
        assert "No model files found" in result.stdout

    def test_group_missing_path(self, tmp_path: Path) -> None:
        """Missing paths fail with a usage error."""
        result = runner.invoke(app, ["group", str(tmp_path / "missing")])

        assert result.exit_code != 0


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_substring(self, library: Path) -> None:
        """Matching names are listed."""
        result = runner.invoke(app, ["search", "car", str(library)])

        assert result.exit_code == 0
        assert "red_car.safetensors" in result.stdout
        assert "blue_truck" not in result.stdout

    def test_search_prefix(self, library: Path) -> None:
        """Prefix mode matches token starts only."""
        result = runner.invoke(app, ["search", "ruck", str(library), "--prefix"])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_no_results(self, library: Path) -> None:
        """Shows message when no results found."""
        result = runner.invoke(app, ["search", "bicycle", str(library)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_limit(self, library: Path) -> None:
        """Results beyond the limit are summarized."""
        result = runner.invoke(app, ["search", "safetensors", str(library), "--limit", "1"])

        assert result.exit_code == 0
        assert "3 more" in result.stdout


class TestSuggestCommand:
    """Tests for the suggest command."""

    def test_suggest_tokens(self, library: Path) -> None:
        """Tokens starting with the prefix are printed."""
        result = runner.invoke(app, ["suggest", "tr", str(library)])

        assert result.exit_code == 0
        assert "truck" in result.stdout

    def test_suggest_zero_limit(self, library: Path) -> None:
        """A zero limit prints no suggestions."""
        result = runner.invoke(app, ["suggest", "tr", str(library), "--limit", "0"])

        assert result.exit_code == 0
        assert "No suggestions" in result.stdout


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_uvicorn(self, library: Path) -> None:
        """The library is indexed before the server starts."""
        with patch("uvicorn.run") as mock_run, patch("modelsift.cli.web_handle") as mock_handle:
            result = runner.invoke(app, ["web", "--port", "9001", "--library", str(library)])

        assert result.exit_code == 0
        mock_handle.rebuild.assert_called_once()
        assert len(mock_handle.rebuild.call_args[0][0]) == 4
        assert mock_run.call_args[1]["port"] == 9001
