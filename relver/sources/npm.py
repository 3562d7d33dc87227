from __future__ import annotations

import json
from pathlib import Path

from relver.core.config import DEFAULT_REGISTRY_TIMEOUT_SECONDS
from relver.core.result import Err, Ok, Result
from relver.core.structured import as_str_list
from relver.platform.process import run as run_process
from relver.sources.base import SourceError


class NpmRegistry:
    """npm registry queries for one package, via the ``npm view`` command."""

    def __init__(
        self,
        *,
        package: str,
        cwd: Path,
        command: str = "npm",
        timeout: float = DEFAULT_REGISTRY_TIMEOUT_SECONDS,
    ) -> None:
        self.package = package
        self.cwd = cwd
        self.command = command
        self.timeout = timeout

    def dist_tag_version(self, channel: str) -> str | None:
        result = run_process(
            [self.command, "view", f"{self.package}@{channel}", "version"],
            cwd=self.cwd,
            timeout=self.timeout,
        )
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def published_versions(self) -> Result[list[str], SourceError]:
        result = run_process(
            [self.command, "view", self.package, "versions", "--json"],
            cwd=self.cwd,
            timeout=self.timeout,
        )
        if isinstance(result, Err):
            return Err(SourceError(source="npm", message=result.error.detail))

        try:
            obj: object = json.loads(result.value)
        except json.JSONDecodeError as e:
            return Err(SourceError(source="npm", message=f"invalid JSON from npm view: {e}"))

        # npm prints a bare string when only one version was ever published.
        if isinstance(obj, str):
            return Ok([obj])

        versions = as_str_list(obj)
        if versions is None:
            return Err(SourceError(source="npm", message="unexpected payload from npm view"))
        return Ok(versions)
