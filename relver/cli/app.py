from __future__ import annotations

import json
from pathlib import Path

import typer

from relver import __version__
from relver.cli.context import build_context
from relver.core.result import Err
from relver.output.errors import print_release_error, release_error_exit_code
from relver.release.model import ChannelSpecs, ReleaseRequest
from relver.release.resolver import resolve_release_version
from relver.sources import default_sources


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Compute the next release version of an npm package."""


@app.command()
def resolve(
    release_type: str = typer.Option(
        "nightly",
        "--type",
        help="Release type: nightly, preview, stable or patch.",
    ),
    patch_from: str | None = typer.Option(
        None,
        "--patch-from",
        help="Channel a patch release starts from: stable or preview.",
    ),
    stable_version_override: str | None = typer.Option(
        None,
        "--stable-version-override",
        "--stable_version_override",
        help="Use this X.Y.Z instead of promoting the latest preview.",
    ),
    preview_version_override: str | None = typer.Option(
        None,
        "--preview-version-override",
        "--preview_version_override",
        help="Use this X.Y.Z-preview.N instead of deriving it from the latest nightly.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to relver.toml (default: $RELVER_CONFIG or ./relver.toml).",
    ),
    cwd: Path | None = typer.Option(
        None,
        "--cwd",
        help="Git checkout to read tags from (default: current directory).",
    ),
) -> None:
    """Compute the next release version and print it as JSON."""
    ctx = build_context(cwd=cwd, config_path=config_path)

    request = ReleaseRequest(
        release_type=release_type,
        patch_from=patch_from,
        stable_version_override=stable_version_override,
        preview_version_override=preview_version_override,
    )
    result = resolve_release_version(
        request,
        sources=default_sources(ctx.config, ctx.cwd),
        specs=ChannelSpecs.from_config(ctx.config.tags),
        console=ctx.console,
    )
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))

    typer.echo(json.dumps(result.value.to_json(), indent=2))


def main() -> None:
    app()
