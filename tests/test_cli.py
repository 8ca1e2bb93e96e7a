"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from postfinder.cli import _setup_logging, app


runner = CliRunner()


@pytest.fixture
def blog_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "blog"
    directory.mkdir()
    (directory / "kafka-basics.md").write_text(
        "---\ntitle: Kafka basics\ndate: 2024-01-02\ntags: kafka, streaming\n---\nTopics and partitions.\n",
        encoding="utf-8",
    )
    (directory / "flink-joins.md").write_text(
        "---\ntitle: Flink joins\ndate: 2024-03-10\ntags: flink\n---\nJoining Kafka topics in Flink.\n",
        encoding="utf-8",
    )
    return directory


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("postfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("postfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_content_not_found(self, tmp_path: Path) -> None:
        """Fails when the content directory doesn't exist."""
        result = runner.invoke(app, ["search", "kafka", "--content", str(tmp_path / "missing")])
        assert result.exit_code != 0

    def test_search_no_results(self, blog_dir: Path) -> None:
        """Shows message when no results found."""
        result = runner.invoke(app, ["search", "haskell", "--content", str(blog_dir)])
        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_with_results(self, blog_dir: Path) -> None:
        """Displays results in a table."""
        result = runner.invoke(app, ["search", "flink kafka", "--content", str(blog_dir)])
        assert result.exit_code == 0
        assert "flink-joins" in result.stdout
        assert "kafka-basics" not in result.stdout

    def test_search_multiple_queries(self, blog_dir: Path) -> None:
        """Each query gets its own table."""
        result = runner.invoke(
            app, ["search", "kafka", "flink", "--content", str(blog_dir), "--workers", "2"]
        )
        assert result.exit_code == 0
        assert "kafka-basics" in result.stdout
        assert "flink-joins" in result.stdout


class TestSuggestCommand:
    """Tests for the suggest command."""

    def test_suggest(self, blog_dir: Path) -> None:
        result = runner.invoke(app, ["suggest", "fl", "--content", str(blog_dir)])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert "flink" in lines
        assert "Flink joins" in lines
        assert lines.index("flink") < lines.index("Flink joins")

    def test_suggest_limit(self, blog_dir: Path) -> None:
        result = runner.invoke(app, ["suggest", "fl", "--content", str(blog_dir), "--limit", "1"])
        assert result.exit_code == 0
        assert "flink" in result.stdout.splitlines()
        assert "Flink joins" not in result.stdout

    def test_suggest_nothing(self, blog_dir: Path) -> None:
        result = runner.invoke(app, ["suggest", "zzz", "--content", str(blog_dir)])
        assert result.exit_code == 0
        assert "No suggestions" in result.stdout


class TestExportCommand:
    """Tests for the export command."""

    def test_export_writes_index(self, blog_dir: Path, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        result = runner.invoke(app, ["export", "--content", str(blog_dir), "--dist", str(dist)])

        assert result.exit_code == 0
        assert "Search index written" in result.stdout
        data = json.loads((dist / "search-index.json").read_text(encoding="utf-8"))
        assert [post["id"] for post in data["posts"]] == ["flink-joins", "kafka-basics"]
        assert data["invertedIndex"]["kafka"] == ["flink-joins", "kafka-basics"]


class TestServeCommand:
    """Tests for the serve command."""

    def test_serve_starts_server(self, blog_dir: Path) -> None:
        """Starts uvicorn server with correct parameters."""
        with patch("uvicorn.run") as mock_uvicorn_run:
            result = runner.invoke(
                app, ["serve", "--host", "0.0.0.0", "--port", "9000", "--content", str(blog_dir)]
            )
            assert result.exit_code == 0
            mock_uvicorn_run.assert_called_once()
            call_kwargs = mock_uvicorn_run.call_args[1]
            assert call_kwargs["host"] == "0.0.0.0"
            assert call_kwargs["port"] == 9000

    def test_serve_port_from_env(self, blog_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "7070")
        with patch("uvicorn.run") as mock_uvicorn_run:
            result = runner.invoke(app, ["serve", "--content", str(blog_dir)])
            assert result.exit_code == 0
            assert mock_uvicorn_run.call_args[1]["port"] == 7070

    def test_serve_warns_missing_content(self, tmp_path: Path) -> None:
        """Shows warning when the content directory doesn't exist."""
        with patch("uvicorn.run"):
            result = runner.invoke(app, ["serve", "--content", str(tmp_path / "missing")])
            assert result.exit_code == 0
            assert "content directory not found" in result.stdout.lower()
