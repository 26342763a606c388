"""Root CLI group for envtag with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from envtag import __version__
from envtag.commands import register_commands
from envtag.commands._context import AppContext
from envtag.config.settings import EnvtagSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="envtag")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-e",
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read variables from a .env file (the process environment wins).",
)
@click.option("--tag", default=None, help="Field metadata key holding rules [default: env].")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    env_file: Path | None,
    tag: str | None,
) -> None:
    """envtag: typed configuration from environment variables."""
    # Unset flags fall through to ENVTAG_* env vars.
    settings = EnvtagSettings.from_cli(
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        env_file=env_file,
        tag=tag,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
