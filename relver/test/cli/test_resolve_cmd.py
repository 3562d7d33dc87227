from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import relver.cli.app as app_mod
from relver import __version__
from relver.cli.context import CLIContext, build_context
from relver.core.config import Config
from relver.core.errors import ErrorCode
from relver.output.console import MockConsole

from ..release.fakes import World, consistent_world

runner = CliRunner()


def _install(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, world: World) -> MockConsole:
    console = MockConsole()

    def fake_context(*, cwd: Path | None = None, config_path: Path | None = None) -> CLIContext:
        del cwd, config_path
        return CLIContext(cwd=tmp_path, config=Config(), console=console)

    monkeypatch.setattr(app_mod, "build_context", fake_context)
    monkeypatch.setattr(app_mod, "default_sources", lambda config, cwd: world.sources)
    return console


def test_prints_result_json(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _install(monkeypatch, tmp_path, consistent_world())

    result = runner.invoke(app_mod.app, ["resolve", "--type", "patch", "--patch-from", "stable"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "releaseTag": "v0.4.2",
        "releaseVersion": "0.4.2",
        "npmTag": "latest",
        "previousReleaseTag": "v0.4.1",
    }


def test_stable_override_underscore_alias(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _install(monkeypatch, tmp_path, consistent_world())

    result = runner.invoke(
        app_mod.app, ["resolve", "--type", "stable", "--stable_version_override", "v1.2.3"]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["releaseTag"] == "v1.2.3"


def test_discrepancy_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    world = consistent_world()
    world.registry.dist_tags["latest"] = "0.4.0"
    console = _install(monkeypatch, tmp_path, world)

    result = runner.invoke(app_mod.app, ["resolve", "--type", "stable"])

    assert result.exit_code == int(ErrorCode.DISCREPANCY)
    assert console.has_error()
    assert console.find(
        "Discrepancy found! NPM latest tag (0.4.0) does not match latest git latest tag (v0.4.1)."
    )


def test_unknown_type_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    world = consistent_world()
    console = _install(monkeypatch, tmp_path, world)

    result = runner.invoke(app_mod.app, ["resolve", "--type", "rc"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert console.find("Unknown release type: rc")
    assert world.query_count == 0


def test_version_flag() -> None:
    result = runner.invoke(app_mod.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


class TestBuildContext:
    def test_defaults_without_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RELVER_CONFIG", raising=False)
        ctx = build_context(cwd=tmp_path)
        assert ctx.cwd == tmp_path.resolve()
        assert ctx.config == Config()

    def test_reads_local_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RELVER_CONFIG", raising=False)
        (tmp_path / "relver.toml").write_text('[registry]\npackage = "tool"\n', encoding="utf-8")
        ctx = build_context(cwd=tmp_path)
        assert ctx.config.registry.package == "tool"

    def test_broken_explicit_config_exits(self, tmp_path: Path) -> None:
        import typer

        with pytest.raises(typer.Exit) as exc:
            build_context(cwd=tmp_path, config_path=tmp_path / "missing.toml")
        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
