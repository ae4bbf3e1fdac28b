"""Tests for the refsync CLI commands."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner
from refsync import cli
from refsync import config as config_module
from refsync.errors import ExecutionFailed, ExitInfo
from refsync.git_sync import GitSync, SyncRequest


def _write_config(base_dir: Path) -> Path:
    config_path = base_dir / "config.toml"
    config_path.write_text(
        '[refsync]\ngit_path = "/usr/bin/git"\n\n'
        '[repositories.jobs]\nlocation = "jobs"\nurl = "file:///tmp/jobs.git"\nref = "main"\n\n'
        '[repositories.docs]\nlocation = "docs"\nurl = "file:///tmp/docs.git"\nref = "v2"\n',
        encoding="utf-8",
    )
    return config_path


def _record_syncs(monkeypatch) -> list[SyncRequest]:
    calls: list[SyncRequest] = []
    monkeypatch.setattr(GitSync, "sync", lambda self, request: calls.append(request))
    return calls


def test_sync_all_configured_repositories(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)
    calls = _record_syncs(monkeypatch)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "sync"])

    assert result.exit_code == 0, result.output
    assert [request.location for request in calls] == [tmp_path / "jobs", tmp_path / "docs"]
    assert "Synced jobs" in result.output
    assert "Synced docs" in result.output


def test_sync_selected_repository(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)
    calls = _record_syncs(monkeypatch)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "sync", "docs"])

    assert result.exit_code == 0, result.output
    assert [request.ref for request in calls] == ["v2"]


def test_sync_unknown_repository(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)
    calls = _record_syncs(monkeypatch)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "sync", "nope"])

    assert result.exit_code == 1
    assert "Unknown repositories: nope" in result.output
    assert calls == []


def test_sync_dry_run_does_not_invoke_git(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)
    calls = _record_syncs(monkeypatch)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "sync", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Dry-run: would sync jobs" in result.output
    assert calls == []


def test_sync_reports_git_stderr(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)

    def fail(self, request):
        raise ExecutionFailed(
            "/usr/bin/git merge --ff-only origin/main",
            b"fatal: Not possible to fast-forward, aborting.\n",
            ExitInfo(128),
        )

    monkeypatch.setattr(GitSync, "sync", fail)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "sync", "jobs"])

    assert result.exit_code == 1
    assert "exit status 128" in result.output
    assert "Not possible to fast-forward" in result.output


def test_sync_missing_config(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(tmp_path / "missing.toml"), "sync"])

    assert result.exit_code == 1
    assert "Run 'refsync config'" in result.output


def test_pin_reports_location_errors(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("refsync.executor.shutil.which", lambda name: "/usr/bin/git")
    target = tmp_path / "plain"
    target.mkdir()

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["pin", str(target), "file:///tmp/x.git", "main"])

    assert result.exit_code == 1
    assert "is not a git repository" in result.output


def test_pin_uses_explicit_git_path(tmp_path: Path, monkeypatch) -> None:
    seen: list[str] = []

    def record(self, location, url, ref):
        seen.append(self.git_path)

    monkeypatch.setattr(GitSync, "sync_repository_to_remote_branch", record)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        ["pin", "--git", "/opt/git", str(tmp_path / "repo"), "file:///tmp/x.git", "main"],
    )

    assert result.exit_code == 0, result.output
    assert seen == ["/opt/git"]


def test_pin_without_git_on_path(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("refsync.executor.shutil.which", lambda name: None)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["pin", str(tmp_path / "repo"), "file:///x", "main"])

    assert result.exit_code == 1
    assert "not found in PATH" in result.output


def test_info_lists_location_states(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    (tmp_path / "jobs" / ".git").mkdir(parents=True)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "info"])

    assert result.exit_code == 0, result.output
    assert "/usr/bin/git" in result.output
    assert "[exists-valid-repo]" in result.output
    assert "[absent]" in result.output


def test_config_command_bootstraps_file(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "conf" / "config.toml"
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.setattr("click.edit", lambda filename=None, **kwargs: None)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["config"])

    assert result.exit_code == 0, result.output
    assert config_path.exists()
    assert f"Wrote default configuration to {config_path}" in result.output
    assert f"Edited {config_path}" in result.output


def test_main_returns_exit_code(tmp_path: Path) -> None:
    assert cli.main(["-c", str(tmp_path / "missing.toml"), "info"]) == 1


def test_main_propagates_command_exit_code(monkeypatch) -> None:
    monkeypatch.setattr(cli.cli, "main", lambda **kwargs: 3)

    assert cli.main(["info"]) == 3


def test_main_returns_zero_without_exit_code(monkeypatch) -> None:
    monkeypatch.setattr(cli.cli, "main", lambda **kwargs: None)

    assert cli.main(["info"]) == 0


def test_config_no_edit_prints_path_only(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)

    def fail_edit(**kwargs):
        raise AssertionError("editor must not open")

    monkeypatch.setattr("click.edit", fail_edit)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "config", "--no-edit"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(config_path)
