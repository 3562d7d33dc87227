from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relver.core.config import Config, find_config, load_config
from relver.core.errors import ErrorCode
from relver.core.result import Err
from relver.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    config: Config
    console: ConsoleProtocol


def build_context(*, cwd: Path | None = None, config_path: Path | None = None) -> CLIContext:
    """Resolve the checkout to query and load its configuration.

    An explicit ``--config`` (or $RELVER_CONFIG) that cannot be loaded is an
    error; without one the defaults apply.
    """
    root = (cwd or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        typer.echo(f"error: --cwd '{root}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    path = config_path or find_config(root)
    config = Config()
    if path is not None:
        loaded = load_config(path)
        if isinstance(loaded, Err):
            typer.echo(f"error: {loaded.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = loaded.value

    return CLIContext(cwd=root, config=config, console=RichConsole(stderr=True))
