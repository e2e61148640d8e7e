"""CLI integration tests for stepdoc."""

import json
from pathlib import Path

from typer.testing import CliRunner

from stepdoc.cli import app


def _invoke_json(runner: CliRunner, *args: str) -> dict:
    """Run with --json -q and parse the single JSON payload on stdout."""
    result = runner.invoke(app, ["--json", "-q", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestVersionCommand:
    """Tests for --version flag."""

    def test_version_shows_version(self, runner: CliRunner) -> None:
        """--version should display version string."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "stepdoc 0.1.0" in result.stdout

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "stepdoc" in result.stdout


class TestHelpCommand:
    """Tests for --help flag."""

    def test_help_shows_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "export", "projects"):
            assert command in result.stdout

    def test_password_help_mentions_plain_text(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["export", "--help"])
        assert result.exit_code == 0
        assert "plain-text" in result.stdout


class TestInitCommand:
    """Tests for init command."""

    def test_init_creates_workspace(self, runner: CliRunner, workspace: Path) -> None:
        data = _invoke_json(runner, "init")
        assert data["success"] == "stepdoc initialized"
        assert (workspace / ".stepdoc" / "config.toml").exists()
        assert (workspace / ".stepdoc" / "projects").is_dir()

    def test_init_is_idempotent(self, runner: CliRunner, workspace: Path) -> None:
        runner.invoke(app, ["init"])
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert "already exists" in result.output


class TestExportCommand:
    """Tests for export command."""

    def test_markdown_to_explicit_output(
        self, runner: CliRunner, sample_export: Path, workspace: Path
    ) -> None:
        data = _invoke_json(
            runner, "export", str(sample_export), "--format", "markdown", "-o", "out/guide.md"
        )
        assert data["format"] == "markdown"
        text = (workspace / "out" / "guide.md").read_text()
        assert text.startswith("# Guide\n")
        assert "## Step 6: U1" in text

    def test_html_default_name(self, runner: CliRunner, sample_export: Path) -> None:
        data = _invoke_json(
            runner, "export", str(sample_export), "--theme", "light", "--password", "pw"
        )
        path = Path(data["path"])
        assert path.name.startswith("Guide_")
        assert path.suffix == ".html"
        html = path.read_text()
        assert "background: #ffffff;" in html
        assert 'id="gate"' in html
        assert "Step 6: U1" in html

    def test_format_from_config(
        self, runner: CliRunner, sample_export: Path, workspace: Path
    ) -> None:
        (workspace / ".stepdoc").mkdir()
        (workspace / ".stepdoc" / "config.toml").write_text('[export]\nformat = "json"\n')
        data = _invoke_json(runner, "export", str(sample_export))
        assert data["format"] == "json"
        exported = json.loads(Path(data["path"]).read_text())
        assert exported["version"] == "2.0"

    def test_requires_exactly_one_source(self, runner: CliRunner, sample_export: Path) -> None:
        assert runner.invoke(app, ["export"]).exit_code == 1
        result = runner.invoke(app, ["export", str(sample_export), "--project", "p"])
        assert result.exit_code == 1

    def test_missing_file(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(app, ["export", "missing.json"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_invalid_json(self, runner: CliRunner, workspace: Path) -> None:
        (workspace / "bad.json").write_text('{"version": "1.0"}')
        result = runner.invoke(app, ["export", "bad.json"])
        assert result.exit_code == 1
        assert "Unsupported schema version" in result.output


class TestProjectsCommands:
    """Tests for the projects sub-commands."""

    def test_import_list_show_delete(self, runner: CliRunner, sample_export: Path) -> None:
        imported = _invoke_json(runner, "projects", "import", str(sample_export))
        project_id = imported["id"]
        assert imported["title"] == "Guide"

        listed = _invoke_json(runner, "projects", "list")
        assert [r["id"] for r in listed] == [project_id]

        shown = _invoke_json(runner, "projects", "show", project_id)
        assert [g["id"] for g in shown["groups"]] == ["g1", "g2"]
        assert shown["steps"][0]["title"] == "U1"

        deleted = _invoke_json(runner, "projects", "delete", project_id)
        assert deleted["id"] == project_id
        assert _invoke_json(runner, "projects", "list") == []

    def test_show_outline(self, runner: CliRunner, sample_export: Path) -> None:
        project_id = _invoke_json(runner, "projects", "import", str(sample_export))["id"]
        result = runner.invoke(app, ["--no-color", "projects", "show", project_id])
        assert result.exit_code == 0
        assert "Group: G1" in result.output
        assert "6. (text) U1" in result.output

    def test_export_saved_project(self, runner: CliRunner, sample_export: Path) -> None:
        project_id = _invoke_json(runner, "projects", "import", str(sample_export))["id"]
        data = _invoke_json(runner, "export", "--project", project_id, "-f", "markdown")
        assert "## Step 1: G1 step 1" in Path(data["path"]).read_text()

    def test_empty_list(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(app, ["projects", "list"])
        assert result.exit_code == 0
        assert "No saved projects" in result.output

    def test_show_missing(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(app, ["projects", "show", "nope"])
        assert result.exit_code == 1
        assert "Project not found" in result.output

    def test_delete_missing(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(app, ["projects", "delete", "nope"])
        assert result.exit_code == 1
