"""Adapters for npm, git tags and GitHub releases."""

from __future__ import annotations

from pathlib import Path

from relver.core.config import Config
from relver.sources.base import (
    RegistrySource,
    ReleaseSource,
    SourceError,
    Sources,
    TagSource,
)
from relver.sources.git import GitTagStore
from relver.sources.github import GitHubReleases
from relver.sources.npm import NpmRegistry

__all__ = [
    "GitHubReleases",
    "GitTagStore",
    "NpmRegistry",
    "RegistrySource",
    "ReleaseSource",
    "SourceError",
    "Sources",
    "TagSource",
    "default_sources",
]


def default_sources(config: Config, cwd: Path) -> Sources:
    """Real adapters for the checkout at ``cwd``."""
    return Sources(
        registry=NpmRegistry(
            package=config.registry.package,
            cwd=cwd,
            command=config.registry.command,
            timeout=config.timeouts.registry,
        ),
        tags=GitTagStore(cwd, prefix=config.tags.prefix, timeout=config.timeouts.git),
        releases=GitHubReleases(
            cwd=cwd,
            repo=config.github.repo,
            timeout=config.timeouts.github,
        ),
    )
