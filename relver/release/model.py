from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relver.core.config import TagsConfig

# npm dist-tag names; "latest" is the stable channel.
Channel = Literal["latest", "preview", "nightly"]
ReleaseType = Literal["nightly", "preview", "stable", "patch"]
PatchSource = Literal["stable", "preview"]

RELEASE_TYPES: tuple[ReleaseType, ...] = ("nightly", "preview", "stable", "patch")
PATCH_SOURCES: tuple[PatchSource, ...] = ("stable", "preview")


@dataclass(frozen=True, slots=True)
class ChannelSpec:
    """Where a channel's latest version lives in each source."""

    channel: Channel
    pattern: str  # git tag glob
    prefix: str = "v"


@dataclass(frozen=True, slots=True)
class ChannelSpecs:
    latest: ChannelSpec
    preview: ChannelSpec
    nightly: ChannelSpec
    prefix: str = "v"

    @classmethod
    def from_config(cls, tags: TagsConfig) -> ChannelSpecs:
        return cls(
            latest=ChannelSpec(channel="latest", pattern=tags.latest, prefix=tags.prefix),
            preview=ChannelSpec(channel="preview", pattern=tags.preview, prefix=tags.prefix),
            nightly=ChannelSpec(channel="nightly", pattern=tags.nightly, prefix=tags.prefix),
            prefix=tags.prefix,
        )

    def for_patch(self, source: PatchSource) -> ChannelSpec:
        return self.latest if source == "stable" else self.preview


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Input of one resolution.

    ``release_type`` and ``patch_from`` are plain strings: they come straight
    from the command line and are validated by the resolver.
    """

    release_type: str = "nightly"
    patch_from: str | None = None
    stable_version_override: str | None = None
    preview_version_override: str | None = None


@dataclass(frozen=True, slots=True)
class VerifiedChannel:
    """Latest version of a channel, agreed on by npm, git and GitHub."""

    channel: Channel
    version: str
    tag: str


@dataclass(frozen=True, slots=True)
class ComputedRelease:
    release_version: str
    npm_tag: Channel
    previous_release_tag: str


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    release_version: str
    release_tag: str
    npm_tag: Channel
    previous_release_tag: str

    def to_json(self) -> dict[str, str]:
        """Key names consumed by the release workflow."""
        return {
            "releaseTag": self.release_tag,
            "releaseVersion": self.release_version,
            "npmTag": self.npm_tag,
            "previousReleaseTag": self.previous_release_tag,
        }
