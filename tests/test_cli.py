# tests/test_cli.py
# ============================================================
# Unit Tests — Command Line Interface
# ============================================================
# Run:
#   pytest tests/test_cli.py -v
# ============================================================

import json

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from cli.main import app
from docingest.errors import RendererUnavailableError
from docingest.utils.logger import set_log_level

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_poppler(monkeypatch):
    """Keep CLI tests independent of a local poppler install."""
    def unavailable():
        raise RendererUnavailableError("Poppler is not installed or not on PATH.")

    monkeypatch.setattr(cli_main, "bootstrap_renderer", unavailable)


class TestExtractCommand:
    """Test `docingest extract`."""

    def test_prints_text(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("Agenda: hiring plan", encoding="utf-8")

        result = runner.invoke(app, ["extract", str(path)])

        assert result.exit_code == 0
        assert "Agenda: hiring plan" in result.output

    def test_writes_payload_json(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Minutes", encoding="utf-8")
        output = tmp_path / "out" / "notes.json"

        result = runner.invoke(app, ["extract", str(path), "--output", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8")) == {"documentContent": "# Minutes"}

    def test_legacy_doc_fails(self, tmp_path):
        path = tmp_path / "memo.doc"
        path.write_bytes(b"\xd0\xcf\x11\xe0")

        result = runner.invoke(app, ["extract", str(path)])

        assert result.exit_code == 1
        assert "legacy_format_unsupported" in result.output

    def test_markup_like_path_is_printed_verbatim(self, tmp_path):
        folder = tmp_path / "draft["
        folder.mkdir()
        path = folder / "final].txt"
        path.write_text("Agenda: [red]budget[/red]", encoding="utf-8")

        result = runner.invoke(app, ["extract", str(path)])

        assert result.exit_code == 0
        assert "Agenda: [red]budget[/red]" in result.output

    def test_markup_like_path_in_error(self, tmp_path):
        folder = tmp_path / "old["
        folder.mkdir()
        path = folder / "memo].doc"
        path.write_bytes(b"\xd0\xcf\x11\xe0")

        result = runner.invoke(app, ["extract", str(path)])

        assert result.exit_code == 1
        assert "legacy_format_unsupported" in result.output

    def test_verbose_flag_is_accepted(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("Agenda", encoding="utf-8")

        result = runner.invoke(app, ["--verbose", "extract", str(path)])
        set_log_level("INFO")

        assert result.exit_code == 0

    def test_missing_file_fails(self, tmp_path):
        result = runner.invoke(app, ["extract", str(tmp_path / "nope.pdf")])
        assert result.exit_code == 1


class TestHealthCommand:
    """Test `docingest health`."""

    def test_reports_missing_renderer(self):
        result = runner.invoke(app, ["health"])
        assert result.exit_code == 1
        assert "unavailable" in result.output
