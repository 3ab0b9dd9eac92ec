"""CLI interface for staticpack.

Command-line tool for embedding a directory of static files into a Python
module and serving it.
"""

import logging
import sys
from pathlib import Path

import click

from staticpack.config import Config
from staticpack.errors import StaticpackError
from staticpack.resolver import Mode


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@click.group()
def cli() -> None:
    """staticpack - embed static files into a Python module."""


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory containing the assets (overrides config)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Generated module file (overrides config)",
)
@click.option(
    "--tag",
    "-t",
    default=None,
    help="Build tag; the artifact only loads when this tag is requested",
)
@click.option(
    "--workers",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of files compressed in parallel (default: 1)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover staticpack.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log every embedded file",
)
def generate(
    input_dir: Path | None,
    output: Path | None,
    tag: str | None,
    workers: int | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Embed a directory of static files into a Python module."""
    from staticpack.generator import generate as generate_artifact

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        input_dir=input_dir,
        output=output,
        tag=tag,
        workers=workers,
    )
    settings = config.generate

    if settings.input is None:
        raise click.UsageError("--input is required (via flag or config)")
    if settings.output is None:
        raise click.UsageError("--output is required (via flag or config)")

    try:
        result = generate_artifact(
            settings.input,
            settings.output,
            tag=settings.tag,
            workers=settings.workers,
        )
    except StaticpackError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(
        click.style(
            f"Embedded {len(result.table)} assets into {result.output}",
            fg="green",
        ),
    )
    if result.tag:
        click.echo(f"Build tag: {result.tag}")


@cli.command()
@click.option(
    "--dev/--compiled",
    "dev",
    default=None,
    help="Serve live from --base-dir or from the generated artifact (overrides config)",
)
@click.option(
    "--base-dir",
    "-b",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Directory served in development mode (overrides config)",
)
@click.option(
    "--artifact",
    "-a",
    default=None,
    help="Generated module file or dotted module name (overrides config)",
)
@click.option(
    "--tag",
    "-t",
    "tags",
    multiple=True,
    help="Requested build tag (repeatable)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover staticpack.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log every request",
)
def serve(
    dev: bool | None,
    base_dir: Path | None,
    artifact: str | None,
    tags: tuple[str, ...],
    host: str | None,
    port: int | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Start the asset server."""
    from staticpack.server import run_server

    _configure_logging(verbose)
    mode = None if dev is None else (Mode.DEVELOPMENT if dev else Mode.COMPILED)
    config = _load_config(config_path).with_overrides(
        mode=mode,
        base_dir=base_dir,
        artifact=artifact,
        tags=list(tags) if tags else None,
        host=host,
        port=port,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.assets.mode is Mode.DEVELOPMENT:
        click.echo(f"Development mode: serving {config.assets.base_dir}")
    else:
        click.echo(f"Compiled mode: serving {config.assets.artifact}")

    try:
        run_server(config)
    except (StaticpackError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
