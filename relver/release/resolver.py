"""Entry point: release type in, verified next version out.

Usage:
    result = resolve_release_version(
        ReleaseRequest(release_type="patch", patch_from="stable"),
        sources=default_sources(config, cwd),
        specs=ChannelSpecs.from_config(config.tags),
    )
    match result:
        case Ok(resolved):
            print(resolved.release_tag)
        case Err(error):
            print(error.message)

Steps run strictly in sequence, each on the answers of the previous one:
request checks (no queries), channel verification and increment, conflict
check. Nothing is retried; every failure means bad data or bad input.
"""

from __future__ import annotations

from datetime import datetime

from relver.core.config import TagsConfig
from relver.core.result import Err, Ok, Result
from relver.output.console import ConsoleProtocol, NullConsole
from relver.release.calculator import (
    nightly_release,
    patch_release,
    preview_release,
    stable_release,
)
from relver.release.conflicts import ensure_no_conflicts
from relver.release.errors import ReleaseError
from relver.release.model import (
    PATCH_SOURCES,
    RELEASE_TYPES,
    ChannelSpecs,
    ComputedRelease,
    ReleaseRequest,
    ResolutionResult,
)
from relver.sources.base import Sources


def check_request(request: ReleaseRequest) -> Result[None, ReleaseError]:
    """Reject a request that cannot be served, before any source is queried."""
    if request.release_type not in RELEASE_TYPES:
        return Err(
            ReleaseError(
                kind="unknown_release_type",
                message=f"Unknown release type: {request.release_type}",
                hint=f"Expected one of: {', '.join(RELEASE_TYPES)}",
            )
        )

    if request.release_type == "patch" and request.patch_from not in PATCH_SOURCES:
        return Err(
            ReleaseError(
                kind="missing_patch_source",
                message="Patch type must be specified with --patch-from=stable or --patch-from=preview",
            )
        )

    return Ok(None)


def _compute(
    request: ReleaseRequest,
    *,
    sources: Sources,
    specs: ChannelSpecs,
    console: ConsoleProtocol,
    now: datetime | None,
) -> Result[ComputedRelease, ReleaseError]:
    match request.release_type:
        case "nightly":
            return nightly_release(sources=sources, specs=specs, console=console, now=now)
        case "preview":
            return preview_release(
                sources=sources,
                specs=specs,
                console=console,
                override=request.preview_version_override,
            )
        case "stable":
            return stable_release(
                sources=sources,
                specs=specs,
                console=console,
                override=request.stable_version_override,
            )
        case "patch":
            patch_from = "stable" if request.patch_from == "stable" else "preview"
            return patch_release(
                sources=sources,
                specs=specs,
                console=console,
                patch_from=patch_from,
            )
        case _:
            raise AssertionError(f"unexpected release type: {request.release_type}")


def resolve_release_version(
    request: ReleaseRequest,
    *,
    sources: Sources,
    specs: ChannelSpecs | None = None,
    console: ConsoleProtocol | None = None,
    now: datetime | None = None,
) -> Result[ResolutionResult, ReleaseError]:
    """Compute the next version for ``request`` and check it is unused.

    Args:
        request: Release type, patch source and manual overrides
        sources: npm, git and GitHub adapters
        specs: Per-channel tag globs (defaults from TagsConfig)
        console: Progress output (discarded when None)
        now: Clock for the nightly date stamp (current UTC time when None)

    Returns:
        Ok(ResolutionResult), or Err(ReleaseError) whose message is the
        diagnostic to show the operator.
    """
    out = console or NullConsole()
    channel_specs = specs or ChannelSpecs.from_config(TagsConfig())

    checked = check_request(request)
    if isinstance(checked, Err):
        return checked

    computed = _compute(request, sources=sources, specs=channel_specs, console=out, now=now)
    if isinstance(computed, Err):
        return computed

    version = computed.value.release_version
    out.info(f"{request.release_type}: next version {version}")

    conflicts = ensure_no_conflicts(
        version, sources=sources, console=out, prefix=channel_specs.prefix
    )
    if isinstance(conflicts, Err):
        return conflicts

    resolved = ResolutionResult(
        release_version=version,
        release_tag=f"{channel_specs.prefix}{version}",
        npm_tag=computed.value.npm_tag,
        previous_release_tag=computed.value.previous_release_tag,
    )
    out.success(f"{resolved.release_tag} -> npm {resolved.npm_tag}")
    return Ok(resolved)
