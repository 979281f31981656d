"""Tests for the CLI implementation."""

import json

import pytest
from typer.testing import CliRunner

from textwindow.cli import app


class TestCLI:
    """Test the CLI functionality."""

    @pytest.fixture
    def runner(self):
        """CLI test runner."""
        return CliRunner()

    @pytest.fixture
    def log_path(self, tmp_path):
        """A small log file with five matching lines."""
        path = tmp_path / "app.log"
        path.write_bytes(b"".join(b"line %d: error here\n" % i for i in range(1, 6)))
        return path

    def test_search_json_pretty(self, runner, log_path):
        """Search prints the JSON payload."""
        result = runner.invoke(app, ["search", str(log_path), "error", "--max-hits", "2"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["q"] == "error"
        assert payload["totalBytes"] == 95
        assert [h["offset"] for h in payload["hits"]] == [0, 19]
        assert payload["nextOffset"] == 38

    def test_search_start_offset(self, runner, log_path):
        """--start-offset resumes a scan."""
        result = runner.invoke(app, ["search", str(log_path), "error", "--start-offset", "76"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert [h["offset"] for h in payload["hits"]] == [76]
        assert payload["nextOffset"] == 95

    def test_search_jsonl(self, runner, log_path):
        """--jsonl prints one hit per line."""
        result = runner.invoke(app, ["search", str(log_path), "error", "--max-hits", "3", "--jsonl"])

        assert result.exit_code == 0
        hits = [json.loads(ln) for ln in result.stdout.splitlines() if ln.startswith("{")]
        assert [h["offset"] for h in hits] == [0, 19, 38]

    def test_search_missing_file(self, runner, tmp_path):
        """Missing files exit with code 1."""
        result = runner.invoke(app, ["search", str(tmp_path / "missing.log"), "error"])
        assert result.exit_code == 1

    def test_search_blank_query(self, runner, log_path):
        """Blank queries exit with code 1."""
        result = runner.invoke(app, ["search", str(log_path), "  "])
        assert result.exit_code == 1

    def test_fetch_to_file(self, runner, log_path, tmp_path):
        """Fetch writes the trimmed range to --output."""
        out = tmp_path / "out.txt"
        result = runner.invoke(app, ["fetch", str(log_path), "--range", "bytes=-5", "-o", str(out)])

        assert result.exit_code == 0
        # the requested tail starts mid-resource, so the partial lead-in line is dropped
        assert out.read_bytes() == log_path.read_bytes()[19:]

    def test_fetch_stdout(self, runner, log_path):
        """Fetch without --output writes to stdout."""
        result = runner.invoke(app, ["fetch", str(log_path)])

        assert result.exit_code == 0
        assert "line 1: error here" in result.stdout
        assert "line 5: error here" in result.stdout

    def test_fetch_bad_range(self, runner, log_path):
        """Unsatisfiable ranges exit with code 1."""
        result = runner.invoke(app, ["fetch", str(log_path), "--range", "bytes=2000-"])
        assert result.exit_code == 1

    def test_bad_configuration(self, runner, log_path, monkeypatch):
        """Invalid TEXTWINDOW_* settings exit with code 2."""
        monkeypatch.setenv("TEXTWINDOW_SAFE_MARGIN", "lots")
        result = runner.invoke(app, ["fetch", str(log_path)])
        assert result.exit_code == 2

    def test_log_level_option(self, runner, log_path):
        """--log-level is accepted before the command."""
        result = runner.invoke(app, ["--log-level", "debug", "search", str(log_path), "error"])
        assert result.exit_code == 0
