"""Typed configuration loading.

relver works without any configuration; a ``relver.toml`` only overrides
the defaults below (package name, tag globs, command timeouts).

Example:
    [registry]
    package = "@google/gemini-cli"

    [github]
    repo = "google-gemini/gemini-cli"

    [tags]
    prefix = "v"
    latest = "v[0-9]*.[0-9]*.[0-9]*"
    preview = "v*-preview*"
    nightly = "v*-nightly*"

    [timeouts]
    git = 30
    registry = 60
    github = 60
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "GitHubConfig",
    "RegistryConfig",
    "TagsConfig",
    "TimeoutsConfig",
    "find_config",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relver.toml"
CONFIG_ENV_VAR = "RELVER_CONFIG"

DEFAULT_PACKAGE = "@google/gemini-cli"
DEFAULT_TAG_PREFIX = "v"
# Globs are a coarse prefilter; candidates are re-checked by parsed channel.
DEFAULT_LATEST_PATTERN = "v[0-9]*.[0-9]*.[0-9]*"
DEFAULT_PREVIEW_PATTERN = "v*-preview*"
DEFAULT_NIGHTLY_PATTERN = "v*-nightly*"

DEFAULT_GIT_TIMEOUT_SECONDS = 30.0
DEFAULT_REGISTRY_TIMEOUT_SECONDS = 60.0
DEFAULT_GITHUB_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """npm registry settings."""

    package: str = DEFAULT_PACKAGE
    command: str = "npm"


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """GitHub release host settings.

    ``repo`` is passed to ``gh --repo``; when unset gh infers it from the
    checkout's remotes.
    """

    repo: str | None = None


@dataclass(frozen=True, slots=True)
class TagsConfig:
    """Tag prefix and per-channel git tag globs."""

    prefix: str = DEFAULT_TAG_PREFIX
    latest: str = DEFAULT_LATEST_PATTERN
    preview: str = DEFAULT_PREVIEW_PATTERN
    nightly: str = DEFAULT_NIGHTLY_PATTERN


@dataclass(frozen=True, slots=True)
class TimeoutsConfig:
    """Per-tool command timeouts, in seconds."""

    git: float = DEFAULT_GIT_TIMEOUT_SECONDS
    registry: float = DEFAULT_REGISTRY_TIMEOUT_SECONDS
    github: float = DEFAULT_GITHUB_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    tags: TagsConfig = field(default_factory=TagsConfig)
    timeouts: TimeoutsConfig = field(default_factory=TimeoutsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        registry: StrDict = get_table(data, "registry") or {}
        github: StrDict = get_table(data, "github") or {}
        tags: StrDict = get_table(data, "tags") or {}
        timeouts: StrDict = get_table(data, "timeouts") or {}

        return cls(
            registry=RegistryConfig(
                package=get_str(registry, "package") or DEFAULT_PACKAGE,
                command=get_str(registry, "command") or "npm",
            ),
            github=GitHubConfig(repo=get_str(github, "repo")),
            tags=TagsConfig(
                prefix=get_str(tags, "prefix") or DEFAULT_TAG_PREFIX,
                latest=get_str(tags, "latest") or DEFAULT_LATEST_PATTERN,
                preview=get_str(tags, "preview") or DEFAULT_PREVIEW_PATTERN,
                nightly=get_str(tags, "nightly") or DEFAULT_NIGHTLY_PATTERN,
            ),
            timeouts=TimeoutsConfig(
                git=get_float(timeouts, "git") or DEFAULT_GIT_TIMEOUT_SECONDS,
                registry=get_float(timeouts, "registry") or DEFAULT_REGISTRY_TIMEOUT_SECONDS,
                github=get_float(timeouts, "github") or DEFAULT_GITHUB_TIMEOUT_SECONDS,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return the defaults if it cannot be read."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()


def find_config(cwd: Path) -> Path | None:
    """Locate the config file: $RELVER_CONFIG first, then ./relver.toml."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    candidate = cwd / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    return None
