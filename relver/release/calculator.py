"""Next-version rules, one per release type.

    nightly  latest nightly X.Y.*       -> X.(Y+1).0-nightly.<UTC date>.<HEAD short sha>
    preview  latest nightly X.Y.Z-...   -> X.Y.Z-preview.0      (or override X.Y.Z-preview.N)
    stable   latest preview X.Y.Z-...   -> X.Y.Z                (or override X.Y.Z)
    patch    latest stable X.Y.Z        -> X.Y.(Z+1)
             latest preview X.Y.Z-preview.N -> X.Y.Z-preview.(N+1)

Every base version comes from ``verify_channel``, never from a single source.
"""

from __future__ import annotations

from datetime import UTC, datetime

from relver.core.result import Err, Ok, Result
from relver.output.console import ConsoleProtocol
from relver.release.errors import ReleaseError
from relver.release.model import ChannelSpecs, ComputedRelease, PatchSource, VerifiedChannel
from relver.release.semver import DEFAULT_PREFIX, Version, matches_format, parse_version, strip_prefix
from relver.release.validator import verify_channel
from relver.sources.base import Sources


# -----------------------------------------------------------------------------
# Pure increment rules
# -----------------------------------------------------------------------------


def next_nightly(latest: Version, *, date: str, short_sha: str) -> Version:
    return Version(latest.major, latest.minor + 1, 0, f"nightly.{date}.{short_sha}")


def first_preview(nightly: Version) -> Version:
    return Version(nightly.major, nightly.minor, nightly.patch, "preview.0")


def promote_preview(preview: Version) -> Version:
    return preview.base


def next_stable_patch(stable: Version) -> Version:
    return Version(stable.major, stable.minor, stable.patch + 1)


def next_preview_patch(preview: Version) -> Result[Version, ReleaseError]:
    n = preview.preview_number
    if n is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=(
                    f"Invalid preview version format: {preview}. "
                    'Expected format like "0.6.0-preview.2"'
                ),
            )
        )

    return Ok(Version(preview.major, preview.minor, preview.patch, f"preview.{n + 1}"))


def nightly_date(now: datetime | None = None) -> str:
    """UTC date stamp (YYYYMMDD) of a nightly label."""
    moment = now or datetime.now(tz=UTC)
    return moment.astimezone(UTC).strftime("%Y%m%d")


def validate_override(
    value: str, *, fmt: str, name: str, prefix: str = DEFAULT_PREFIX
) -> Result[str, ReleaseError]:
    """Normalize a manual override (a leading tag prefix is dropped) and check its format."""
    version = strip_prefix(value.strip(), prefix)
    if not matches_format(version, fmt):
        return Err(
            ReleaseError(
                kind="invalid_override",
                message=f"Invalid {name}: {version}. Must be in {fmt} format.",
            )
        )
    return Ok(version)


def _parse_verified(verified: VerifiedChannel) -> Result[Version, ReleaseError]:
    version = parse_version(verified.version)
    if version is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"Could not parse version: {verified.version}",
                hint=f"npm {verified.channel} dist-tag",
            )
        )
    return Ok(version)


# -----------------------------------------------------------------------------
# Release types
# -----------------------------------------------------------------------------


def nightly_release(
    *,
    sources: Sources,
    specs: ChannelSpecs,
    console: ConsoleProtocol,
    now: datetime | None = None,
) -> Result[ComputedRelease, ReleaseError]:
    verified = verify_channel(sources=sources, spec=specs.nightly, console=console)
    if isinstance(verified, Err):
        return verified

    latest = _parse_verified(verified.value)
    if isinstance(latest, Err):
        return latest

    sha = sources.tags.head_short_hash()
    if isinstance(sha, Err):
        return Err(
            ReleaseError(
                kind="source_failed",
                message="Failed to read the short hash of HEAD.",
                hint=sha.error.message,
            )
        )

    try:
        version = next_nightly(latest.value, date=nightly_date(now), short_sha=sha.value)
    except ValueError:
        return Err(
            ReleaseError(
                kind="source_failed",
                message=f"Unexpected short hash of HEAD: {sha.value}",
                hint="expected lowercase hexadecimal from git rev-parse --short HEAD",
            )
        )
    return Ok(
        ComputedRelease(
            release_version=str(version),
            npm_tag="nightly",
            previous_release_tag=verified.value.tag,
        )
    )


def preview_release(
    *,
    sources: Sources,
    specs: ChannelSpecs,
    console: ConsoleProtocol,
    override: str | None = None,
) -> Result[ComputedRelease, ReleaseError]:
    override_version: str | None = None
    if override:
        checked = validate_override(
            override,
            fmt="X.Y.Z-preview.N",
            name="preview_version_override",
            prefix=specs.prefix,
        )
        if isinstance(checked, Err):
            return checked
        override_version = checked.value

    nightly = verify_channel(sources=sources, spec=specs.nightly, console=console)
    if isinstance(nightly, Err):
        return nightly

    if override_version is not None:
        release_version = override_version
    else:
        latest = _parse_verified(nightly.value)
        if isinstance(latest, Err):
            return latest
        release_version = str(first_preview(latest.value))

    previous = verify_channel(sources=sources, spec=specs.preview, console=console)
    if isinstance(previous, Err):
        return previous

    return Ok(
        ComputedRelease(
            release_version=release_version,
            npm_tag="preview",
            previous_release_tag=previous.value.tag,
        )
    )


def stable_release(
    *,
    sources: Sources,
    specs: ChannelSpecs,
    console: ConsoleProtocol,
    override: str | None = None,
) -> Result[ComputedRelease, ReleaseError]:
    override_version: str | None = None
    if override:
        checked = validate_override(
            override, fmt="X.Y.Z", name="stable_version_override", prefix=specs.prefix
        )
        if isinstance(checked, Err):
            return checked
        override_version = checked.value

    preview = verify_channel(sources=sources, spec=specs.preview, console=console)
    if isinstance(preview, Err):
        return preview

    if override_version is not None:
        release_version = override_version
    else:
        latest = _parse_verified(preview.value)
        if isinstance(latest, Err):
            return latest
        release_version = str(promote_preview(latest.value))

    # The previous stable is only reported, it is not the base of the new version.
    previous = verify_channel(sources=sources, spec=specs.latest, console=console)
    if isinstance(previous, Err):
        return previous

    return Ok(
        ComputedRelease(
            release_version=release_version,
            npm_tag="latest",
            previous_release_tag=previous.value.tag,
        )
    )


def patch_release(
    *,
    sources: Sources,
    specs: ChannelSpecs,
    console: ConsoleProtocol,
    patch_from: PatchSource,
) -> Result[ComputedRelease, ReleaseError]:
    spec = specs.for_patch(patch_from)
    verified = verify_channel(sources=sources, spec=spec, console=console)
    if isinstance(verified, Err):
        return verified

    latest = _parse_verified(verified.value)
    if isinstance(latest, Err):
        return latest

    if patch_from == "stable":
        version = next_stable_patch(latest.value)
    else:
        bumped = next_preview_patch(latest.value)
        if isinstance(bumped, Err):
            return bumped
        version = bumped.value

    return Ok(
        ComputedRelease(
            release_version=str(version),
            npm_tag=spec.channel,
            previous_release_tag=verified.value.tag,
        )
    )
