"""Three-way agreement check for the latest version of a channel.

npm's dist-tag is the source of truth for which version is current. The
highest git tag of the channel must be exactly that version (with prefix),
and GitHub must have a release under that tag. Any drift between the three
is fatal: computing the next version from a drifted source would tag a
broken release.
"""

from __future__ import annotations

from relver.core.result import Err, Ok, Result
from relver.output.console import ConsoleProtocol, Style
from relver.release.errors import ReleaseError
from relver.release.model import ChannelSpec, VerifiedChannel
from relver.sources.base import Sources


def verify_channel(
    *,
    sources: Sources,
    spec: ChannelSpec,
    console: ConsoleProtocol,
) -> Result[VerifiedChannel, ReleaseError]:
    channel = spec.channel
    prefix = spec.prefix
    npm_version = sources.registry.dist_tag_version(channel) or ""
    git_tag = sources.tags.latest_tag(spec.pattern, channel=channel) or ""

    if f"{prefix}{npm_version}" != git_tag:
        return Err(
            ReleaseError(
                kind="discrepancy",
                message=(
                    f"Discrepancy found! NPM {channel} tag ({npm_version}) does not match "
                    f"latest git {channel} tag ({git_tag})."
                ),
                hint=f"git tags matched with: {spec.pattern}",
            )
        )

    release = sources.releases.release_tag(git_tag)
    match release:
        case Err(e):
            return Err(
                ReleaseError(
                    kind="missing_release",
                    message=f"Discrepancy found! Failed to verify GitHub release for {git_tag}.",
                    hint=e.message,
                )
            )
        case Ok(name) if name != git_tag:
            return Err(
                ReleaseError(
                    kind="missing_release",
                    message=f"Discrepancy found! Failed to verify GitHub release for {git_tag}.",
                    hint=(
                        f"NPM version {git_tag} is missing a corresponding GitHub release "
                        f"(gh reported {name})"
                    ),
                )
            )
        case Ok(_):
            pass

    console.print(f"{channel}: npm {npm_version} = git {git_tag} = release {git_tag}", Style.DIM)
    return Ok(VerifiedChannel(channel=channel, version=npm_version, tag=git_tag))
