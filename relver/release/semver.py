"""Semantic versions of the three release channels.

Only three shapes are recognised:

    X.Y.Z                          stable ("latest" dist-tag)
    X.Y.Z-preview.N                preview
    X.Y.Z-nightly.YYYYMMDD.<hash>  nightly

Ordering follows semver precedence: a release sorts above every prerelease of
the same X.Y.Z, and prerelease identifiers compare numerically when numeric.
Tag lists are always ranked with this ordering, never lexically and never in
the order a tool happened to print them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering

from relver.release.model import Channel

_NUM = r"0|[1-9]\d*"
_PRERELEASE = rf"preview\.(?:{_NUM})|nightly\.\d{{8}}\.[0-9a-f]+"
_PRERELEASE_RE = re.compile(rf"^(?:{_PRERELEASE})$")
_VERSION_RE = re.compile(
    rf"^(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})(?:-(?P<pre>{_PRERELEASE}))?$"
)

OVERRIDE_FORMATS: dict[str, re.Pattern[str]] = {
    "X.Y.Z": re.compile(r"^\d+\.\d+\.\d+$"),
    "X.Y.Z-preview.N": re.compile(r"^\d+\.\d+\.\d+-preview\.\d+$"),
}

DEFAULT_PREFIX = "v"


def _identifier_key(ident: str) -> tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones.
    if ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"negative version component: {self}")
        if self.prerelease is not None and not _PRERELEASE_RE.match(self.prerelease):
            raise ValueError(f"unsupported prerelease label: {self.prerelease!r}")

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is None:
            return core
        return f"{core}-{self.prerelease}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def _precedence(self) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, ())
        idents = tuple(_identifier_key(p) for p in self.prerelease.split("."))
        return (self.major, self.minor, self.patch, 0, idents)

    @property
    def base(self) -> Version:
        """The same X.Y.Z without a prerelease label."""
        return Version(self.major, self.minor, self.patch)

    @property
    def channel(self) -> Channel:
        if self.prerelease is None:
            return "latest"
        if self.prerelease.startswith("preview."):
            return "preview"
        return "nightly"

    @property
    def preview_number(self) -> int | None:
        """N of a ``preview.N`` label, or None."""
        if self.prerelease is None or not self.prerelease.startswith("preview."):
            return None
        return int(self.prerelease.split(".", 1)[1])

    def to_tag(self, prefix: str = DEFAULT_PREFIX) -> str:
        return f"{prefix}{self}"


def parse_version(text: str) -> Version | None:
    """Parse a bare version string ("0.6.0-preview.2"). Returns None if malformed."""
    m = _VERSION_RE.match(text)
    if m is None:
        return None
    return Version(
        int(m.group("major")),
        int(m.group("minor")),
        int(m.group("patch")),
        m.group("pre"),
    )


def strip_prefix(tag: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Remove one leading prefix, if present."""
    if prefix and tag.startswith(prefix):
        return tag[len(prefix) :]
    return tag


def add_prefix(version: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Prefix a version; a string that already carries the prefix is unchanged."""
    if prefix and version.startswith(prefix):
        return version
    return f"{prefix}{version}"


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as a sorts before, equal to, or after b."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def sort_versions(items: Iterable[str], *, descending: bool = True) -> list[Version]:
    """Parse and sort version strings; malformed entries are dropped."""
    parsed = [v for v in (parse_version(s) for s in items) if v is not None]
    return sorted(parsed, reverse=descending)


def latest_version(items: Iterable[str], *, channel: Channel | None = None) -> Version | None:
    """Highest-precedence version among items, optionally limited to one channel."""
    ranked = sort_versions(items)
    for v in ranked:
        if channel is None or v.channel == channel:
            return v
    return None


def matches_format(value: str, fmt: str) -> bool:
    """Check an override against one of the OVERRIDE_FORMATS."""
    pattern = OVERRIDE_FORMATS.get(fmt)
    return pattern is not None and pattern.match(value) is not None
