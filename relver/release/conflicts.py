"""Refuse a version that already exists anywhere.

Unlike the channel checks, this one fails open: a source that cannot be
queried counts as "no conflict", so a partial outage does not block a
release. The check is there to catch accidental reuse.
"""

from __future__ import annotations

from relver.core.result import Err, Ok, Result
from relver.output.console import ConsoleProtocol
from relver.release.errors import ReleaseError
from relver.release.semver import DEFAULT_PREFIX
from relver.sources.base import Sources


def find_conflicts(
    version: str,
    *,
    sources: Sources,
    console: ConsoleProtocol,
    prefix: str = DEFAULT_PREFIX,
) -> list[str]:
    tag = f"{prefix}{version}"
    conflicts: list[str] = []

    match sources.registry.published_versions():
        case Ok(versions):
            if version in versions:
                conflicts.append(f"NPM registry already has version {version}")
        case Err(e):
            console.warning(f"conflict check skipped: {e}")

    match sources.tags.tag_exists(tag):
        case Ok(exists):
            if exists:
                conflicts.append(f"Git tag {tag} already exists")
        case Err(e):
            console.warning(f"conflict check skipped: {e}")

    # A missing release is the expected answer here, not a warning.
    match sources.releases.release_tag(tag):
        case Ok(name):
            if name == tag:
                conflicts.append(f"GitHub release {tag} already exists")
        case Err(_):
            pass

    return conflicts


def ensure_no_conflicts(
    version: str,
    *,
    sources: Sources,
    console: ConsoleProtocol,
    prefix: str = DEFAULT_PREFIX,
) -> Result[None, ReleaseError]:
    conflicts = find_conflicts(version, sources=sources, console=console, prefix=prefix)
    if not conflicts:
        return Ok(None)

    return Err(
        ReleaseError(
            kind="version_conflict",
            message=f"Version conflict! Cannot create {version}:\n" + "\n".join(conflicts),
            hint="Pick another version or clean up the existing artifacts.",
        )
    )
