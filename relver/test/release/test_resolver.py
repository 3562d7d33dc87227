from __future__ import annotations

import pytest

from relver.core.result import Err, Ok, Result
from relver.output.console import MockConsole
from relver.release.errors import ReleaseError
from relver.release.model import ReleaseRequest, ResolutionResult
from relver.release.resolver import check_request, resolve_release_version

from .fakes import NOW, World, consistent_world


def _resolve(
    request: ReleaseRequest, console: MockConsole | None = None
) -> tuple[World, Result[ResolutionResult, ReleaseError]]:
    world = consistent_world()
    return world, resolve_release_version(
        request, sources=world.sources, console=console or MockConsole(), now=NOW
    )


class TestHappyPath:
    def test_stable_from_latest_preview(self) -> None:
        _, result = _resolve(ReleaseRequest(release_type="stable"))
        assert isinstance(result, Ok)
        assert result.value.release_version == "0.5.0"
        assert result.value.release_tag == "v0.5.0"
        assert result.value.npm_tag == "latest"
        assert result.value.previous_release_tag == "v0.4.1"

    def test_stable_override(self) -> None:
        _, result = _resolve(
            ReleaseRequest(release_type="stable", stable_version_override="1.2.3")
        )
        assert isinstance(result, Ok)
        assert result.value.release_version == "1.2.3"
        assert result.value.previous_release_tag == "v0.4.1"

    def test_preview_from_latest_nightly(self) -> None:
        _, result = _resolve(ReleaseRequest(release_type="preview"))
        assert isinstance(result, Ok)
        assert result.value.release_version == "0.6.0-preview.0"
        assert result.value.npm_tag == "preview"
        assert result.value.previous_release_tag == "v0.5.0-preview.2"

    def test_preview_override(self) -> None:
        _, result = _resolve(
            ReleaseRequest(release_type="preview", preview_version_override="v4.5.6-preview.0")
        )
        assert isinstance(result, Ok)
        assert result.value.release_tag == "v4.5.6-preview.0"

    def test_nightly(self) -> None:
        _, result = _resolve(ReleaseRequest(release_type="nightly"))
        assert isinstance(result, Ok)
        assert result.value.release_version == "0.7.0-nightly.20250917.d3bf8a3d"
        assert result.value.npm_tag == "nightly"
        assert result.value.previous_release_tag == "v0.6.0-nightly.20250910.a31830a3"

    @pytest.mark.parametrize(
        ("patch_from", "version", "npm_tag", "previous"),
        [
            ("stable", "0.4.2", "latest", "v0.4.1"),
            ("preview", "0.5.0-preview.3", "preview", "v0.5.0-preview.2"),
        ],
    )
    def test_patch(self, patch_from: str, version: str, npm_tag: str, previous: str) -> None:
        _, result = _resolve(ReleaseRequest(release_type="patch", patch_from=patch_from))
        assert isinstance(result, Ok)
        assert result.value.release_version == version
        assert result.value.npm_tag == npm_tag
        assert result.value.previous_release_tag == previous

    def test_to_json_keys(self) -> None:
        _, result = _resolve(ReleaseRequest(release_type="patch", patch_from="stable"))
        assert isinstance(result, Ok)
        assert result.value.to_json() == {
            "releaseTag": "v0.4.2",
            "releaseVersion": "0.4.2",
            "npmTag": "latest",
            "previousReleaseTag": "v0.4.1",
        }

    def test_reports_progress(self) -> None:
        console = MockConsole()
        _resolve(ReleaseRequest(release_type="stable"), console)
        assert console.find("next version 0.5.0")
        assert console.find("v0.5.0 -> npm latest")


class TestRequestChecks:
    def test_unknown_release_type_fails_before_queries(self) -> None:
        world, result = _resolve(ReleaseRequest(release_type="beta"))
        assert isinstance(result, Err)
        assert result.error.kind == "unknown_release_type"
        assert result.error.message == "Unknown release type: beta"
        assert world.query_count == 0

    @pytest.mark.parametrize("patch_from", [None, "", "nightly"])
    def test_patch_requires_source(self, patch_from: str | None) -> None:
        world, result = _resolve(ReleaseRequest(release_type="patch", patch_from=patch_from))
        assert isinstance(result, Err)
        assert result.error.message == (
            "Patch type must be specified with --patch-from=stable or --patch-from=preview"
        )
        assert world.query_count == 0

    def test_check_request_accepts_known_types(self) -> None:
        for release_type in ("nightly", "preview", "stable"):
            assert check_request(ReleaseRequest(release_type=release_type)) == Ok(None)

    def test_invalid_stable_override(self) -> None:
        _, result = _resolve(
            ReleaseRequest(release_type="stable", stable_version_override="1.2.3-beta")
        )
        assert isinstance(result, Err)
        assert result.error.message == (
            "Invalid stable_version_override: 1.2.3-beta. Must be in X.Y.Z format."
        )

    @pytest.mark.parametrize("override", ["4.5.6-preview", "4.5.6"])
    def test_invalid_preview_override(self, override: str) -> None:
        _, result = _resolve(
            ReleaseRequest(release_type="preview", preview_version_override=override)
        )
        assert isinstance(result, Err)
        assert result.error.message == (
            f"Invalid preview_version_override: {override}. Must be in X.Y.Z-preview.N format."
        )


class TestDiscrepancies:
    def test_registry_behind_git(self) -> None:
        world = consistent_world()
        world.tags.tags.append("v0.4.2")
        world.releases.tags.add("v0.4.2")

        result = resolve_release_version(
            ReleaseRequest(release_type="patch", patch_from="stable"),
            sources=world.sources,
            console=MockConsole(),
        )
        assert isinstance(result, Err)
        assert result.error.message == (
            "Discrepancy found! NPM latest tag (0.4.1) does not match latest git latest tag (v0.4.2)."
        )
        assert "versions" not in world.registry.calls

    def test_stable_fails_when_previous_stable_has_no_release(self) -> None:
        world = consistent_world()
        world.releases.tags.discard("v0.4.1")

        result = resolve_release_version(
            ReleaseRequest(release_type="stable"), sources=world.sources, console=MockConsole()
        )
        assert isinstance(result, Err)
        assert result.error.message == "Discrepancy found! Failed to verify GitHub release for v0.4.1."


class TestConflicts:
    def test_existing_version_is_refused_even_if_git_and_github_are_down(self) -> None:
        world = consistent_world()
        assert world.registry.versions is not None
        world.registry.versions.append("0.4.2")

        world.tags.exists_broken = True
        world.releases.unreachable.add("v0.4.2")

        result = resolve_release_version(
            ReleaseRequest(release_type="patch", patch_from="stable"),
            sources=world.sources,
            console=MockConsole(),
        )
        assert isinstance(result, Err)
        assert result.error.kind == "version_conflict"
        assert result.error.message == (
            "Version conflict! Cannot create 0.4.2:\nNPM registry already has version 0.4.2"
        )
