from __future__ import annotations

from pathlib import Path

import pytest

from relver.core.result import Err, Ok
from relver.platform.process import ProcessError
from relver.sources import npm as npm_mod
from relver.sources.npm import NpmRegistry


def _registry(tmp_path: Path) -> NpmRegistry:
    return NpmRegistry(package="@scope/tool", cwd=tmp_path)


def _fail(cmd: list[str], stderr: str = "npm ERR! code E404") -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=1, stdout="", stderr=stderr))


def test_dist_tag_version(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
        del cwd, timeout
        calls.append(cmd)
        return Ok("0.5.0-preview.2\n")

    monkeypatch.setattr(npm_mod, "run_process", fake_run)

    assert _registry(tmp_path).dist_tag_version("preview") == "0.5.0-preview.2"
    assert calls == [["npm", "view", "@scope/tool@preview", "version"]]


@pytest.mark.parametrize("outcome", ["failure", "empty"])
def test_dist_tag_version_not_found(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, outcome: str
) -> None:
    def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
        del cwd, timeout
        return _fail(cmd) if outcome == "failure" else Ok("\n")

    monkeypatch.setattr(npm_mod, "run_process", fake_run)

    assert _registry(tmp_path).dist_tag_version("nightly") is None


def test_published_versions(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
        del cwd, timeout
        assert cmd == ["npm", "view", "@scope/tool", "versions", "--json"]
        return Ok('["0.4.1", "0.5.0-preview.2"]')

    monkeypatch.setattr(npm_mod, "run_process", fake_run)

    assert _registry(tmp_path).published_versions() == Ok(["0.4.1", "0.5.0-preview.2"])


def test_published_versions_single_version_is_a_string(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(npm_mod, "run_process", lambda cmd, *, cwd, timeout=None: Ok('"0.1.0"'))

    assert _registry(tmp_path).published_versions() == Ok(["0.1.0"])


@pytest.mark.parametrize("stdout", ["not json", '{"a": 1}', "[1, 2]"])
def test_published_versions_bad_payload(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, stdout: str
) -> None:
    monkeypatch.setattr(npm_mod, "run_process", lambda cmd, *, cwd, timeout=None: Ok(stdout))

    result = _registry(tmp_path).published_versions()
    assert isinstance(result, Err)
    assert result.error.source == "npm"


def test_published_versions_command_failure(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(npm_mod, "run_process", lambda cmd, *, cwd, timeout=None: _fail(cmd))

    result = _registry(tmp_path).published_versions()
    assert isinstance(result, Err)
    assert result.error.message == "npm ERR! code E404"
