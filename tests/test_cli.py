"""Tests for the CLI commands."""

import json
from pathlib import Path

from typer.testing import CliRunner

from conftest import commit_version, write_manifest
from versioncheck.cli import EXIT_FAILURE, EXIT_NEUTRAL, app

runner = CliRunner()


def _json(text: str) -> dict:
    """Pull the JSON report out of stdout, past any log group markers."""
    return json.loads(text[text.index("{"): text.rindex("}") + 1])


def _env(workspace: Path, event: dict, **extra) -> dict:
    event_path = workspace / "event.json"
    event_path.write_text(json.dumps(event))
    env = {
        "GITHUB_WORKSPACE": str(workspace),
        "GITHUB_EVENT_PATH": str(event_path),
        "GITHUB_REPOSITORY": "",
        "GITHUB_OUTPUT": str(workspace / "github_output"),
    }
    env.update(extra)
    return env


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "versioncheck" in result.output


class TestInit:
    def test_creates_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / ".versioncheck.toml").exists()

    def test_refuses_overwrite(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".versioncheck.toml").write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1


class TestRun:
    def test_detects_change_with_local_git(self, tmp_git_repo: Path, monkeypatch):
        sha = commit_version(tmp_git_repo, "1.1.0", "chore: release 1.1.0")
        env = _env(tmp_git_repo, {"commits": [{"id": sha, "message": "chore: release 1.1.0"}]})
        monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
        result = runner.invoke(app, ["run"], env=env)
        assert result.exit_code == 0, result.output
        outputs = (tmp_git_repo / "github_output").read_text().splitlines()
        assert "changed=true" in outputs
        assert "type=minor" in outputs
        assert f"commit={sha}" in outputs

    def test_json_format(self, tmp_git_repo: Path):
        env = _env(tmp_git_repo, {"commits": [{"id": "x", "message": "docs"}]})
        result = runner.invoke(app, ["run", "--format", "json"], env=env)
        assert result.exit_code == 0, result.output
        data = _json(result.stdout)
        assert data["changed"] is False

    def test_missing_manifest_is_neutral(self, tmp_path: Path):
        env = _env(tmp_path, {"commits": []})
        result = runner.invoke(app, ["run"], env=env)
        assert result.exit_code == EXIT_NEUTRAL

    def test_invalid_option_value_fails(self, tmp_path: Path):
        write_manifest(tmp_path, "1.0.0")
        env = _env(tmp_path, {"commits": []})
        result = runner.invoke(app, ["run", "--assume-same-version", "both"], env=env)
        assert result.exit_code == EXIT_FAILURE

    def test_manifest_without_version_fails(self, tmp_path: Path):
        write_manifest(tmp_path, None)
        env = _env(tmp_path, {"commits": []})
        result = runner.invoke(app, ["run"], env=env)
        assert result.exit_code == EXIT_FAILURE

    def test_malformed_event_fails_cleanly(self, tmp_path: Path):
        write_manifest(tmp_path, "1.0.0")
        env = _env(tmp_path, {"commits": [{"message": "1.0.0"}]})
        result = runner.invoke(app, ["run"], env=env)
        assert result.exit_code == EXIT_FAILURE
        assert isinstance(result.exception, SystemExit)

    def test_static_checking_without_url_fails(self, tmp_path: Path):
        write_manifest(tmp_path, "1.0.0")
        env = _env(tmp_path, {"commits": []})
        result = runner.invoke(app, ["run", "--static-checking", "localIsNew"], env=env)
        assert result.exit_code == EXIT_FAILURE
        assert isinstance(result.exception, SystemExit)

    def test_bad_format(self, tmp_path: Path):
        result = runner.invoke(app, ["run", "--format", "xml"], env=_env(tmp_path, {}))
        assert result.exit_code == 2


class TestCompare:
    def test_two_paths(self, tmp_path: Path):
        old = write_manifest(tmp_path / "old", "2.0.0")
        new = write_manifest(tmp_path / "new", "2.0.1")
        result = runner.invoke(app, ["compare", str(old), str(new), "--format", "json"])
        assert result.exit_code == 0, result.output
        data = _json(result.stdout)
        assert data["changed"] is True
        assert data["version"] == "2.0.1"
        assert data["type"] == "patch"

    def test_missing_file_is_neutral(self, tmp_path: Path):
        new = write_manifest(tmp_path, "1.0.0")
        result = runner.invoke(app, ["compare", str(tmp_path / "nope.json"), str(new)])
        assert result.exit_code == EXIT_NEUTRAL
