"""Git tag queries against a local checkout."""

from __future__ import annotations

from pathlib import Path

from relver.core.config import DEFAULT_GIT_TIMEOUT_SECONDS
from relver.core.result import Err, Ok, Result
from relver.platform.process import ProcessError
from relver.platform.process import run as run_process
from relver.release.model import Channel
from relver.release.semver import DEFAULT_PREFIX, latest_version, strip_prefix
from relver.sources.base import SourceError

__all__ = ["GitTagStore"]


class GitTagStore:
    """Tags of one git repository.

    Attributes:
        path: Repository root
        prefix: Prefix carried by version tags ("v")
    """

    def __init__(
        self,
        path: Path,
        *,
        prefix: str = DEFAULT_PREFIX,
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        self.path = path
        self.prefix = prefix
        self.timeout = timeout

    def list_tags(self, pattern: str) -> Result[list[str], SourceError]:
        """Tags matching a glob, in whatever order git prints them."""
        result = self._run(["tag", "-l", pattern])
        match result:
            case Err(e):
                return Err(SourceError(source="git", message=e.detail))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def latest_tag(self, pattern: str, *, channel: Channel | None = None) -> str | None:
        """Highest-precedence version tag matching ``pattern``.

        Tags that are not recognised versions are ignored, as are versions
        of another channel when ``channel`` is given. Returns None when no
        candidate is left or git fails.
        """
        listed = self.list_tags(pattern)
        if isinstance(listed, Err):
            return None

        versions = [strip_prefix(t, self.prefix) for t in listed.value if t.startswith(self.prefix)]
        best = latest_version(versions, channel=channel)
        if best is None:
            return None
        return best.to_tag(self.prefix)

    def tag_exists(self, tag: str) -> Result[bool, SourceError]:
        listed = self.list_tags(tag)
        if isinstance(listed, Err):
            return listed
        return Ok(tag in listed.value)

    def head_short_hash(self) -> Result[str, SourceError]:
        result = self._run(["rev-parse", "--short", "HEAD"])
        match result:
            case Err(e):
                return Err(SourceError(source="git", message=e.detail))
            case Ok(stdout):
                sha = stdout.strip()
                if not sha:
                    return Err(SourceError(source="git", message="empty output from rev-parse"))
                return Ok(sha)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=self.timeout,
        )
