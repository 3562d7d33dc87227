"""Interfaces of the three sources of truth.

The resolver only sees these protocols. The concrete adapters shell out to
npm, git and gh; tests plug in in-memory fakes.

Lookups used to establish the *latest* version of a channel collapse every
failure into "not found" (None): an empty answer is then caught as a
discrepancy by the validator. Lookups whose failure matters to the caller
return a Result instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from relver.core.result import Result
from relver.release.model import Channel

SourceName = Literal["npm", "git", "github"]


@dataclass(frozen=True, slots=True)
class SourceError:
    """A query against a source could not be answered."""

    source: SourceName
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


class RegistrySource(Protocol):
    def dist_tag_version(self, channel: str) -> str | None:
        """Version the registry's ``channel`` dist-tag points to."""
        ...

    def published_versions(self) -> Result[list[str], SourceError]:
        """Every version ever published."""
        ...


class TagSource(Protocol):
    def latest_tag(self, pattern: str, *, channel: Channel | None = None) -> str | None:
        """Highest-precedence tag matching the glob ``pattern``."""
        ...

    def tag_exists(self, tag: str) -> Result[bool, SourceError]: ...

    def head_short_hash(self) -> Result[str, SourceError]: ...


class ReleaseSource(Protocol):
    def release_tag(self, tag: str) -> Result[str, SourceError]:
        """Tag name of the release called ``tag``, as reported by the host."""
        ...


@dataclass(frozen=True, slots=True)
class Sources:
    registry: RegistrySource
    tags: TagSource
    releases: ReleaseSource
