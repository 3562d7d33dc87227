from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "unknown_release_type",
    "missing_patch_source",
    "discrepancy",
    "missing_release",
    "invalid_override",
    "invalid_version",
    "version_conflict",
    "source_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Failure of a version resolution.

    ``message`` is the user-facing diagnostic and is printed verbatim;
    release pipelines match on it. ``hint`` carries secondary detail such as
    the stderr of the command that failed.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
