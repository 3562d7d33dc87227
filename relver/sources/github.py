from __future__ import annotations

from pathlib import Path

from relver.core.config import DEFAULT_GITHUB_TIMEOUT_SECONDS
from relver.core.result import Err, Ok, Result
from relver.platform.process import run as run_process
from relver.sources.base import SourceError


class GitHubReleases:
    """GitHub releases, queried through the ``gh`` CLI.

    ``repo`` (owner/name) is optional; without it gh resolves the repository
    from the remotes of ``cwd``.
    """

    def __init__(
        self,
        *,
        cwd: Path,
        repo: str | None = None,
        timeout: float = DEFAULT_GITHUB_TIMEOUT_SECONDS,
    ) -> None:
        self.cwd = cwd
        self.repo = repo
        self.timeout = timeout

    def release_tag(self, tag: str) -> Result[str, SourceError]:
        cmd = ["gh", "release", "view", tag, "--json", "tagName", "--jq", ".tagName"]
        if self.repo:
            cmd += ["--repo", self.repo]

        result = run_process(cmd, cwd=self.cwd, timeout=self.timeout)
        match result:
            case Err(e):
                return Err(SourceError(source="github", message=e.detail))
            case Ok(stdout):
                name = stdout.strip()
                if not name:
                    return Err(SourceError(source="github", message=f"no tagName for release {tag}"))
                return Ok(name)
