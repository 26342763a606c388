"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds the environment lookup lazily and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import click

from envtag.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from envtag.config.settings import EnvtagSettings
    from envtag.services.inspect import InspectService
    from envtag.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: EnvtagSettings) -> None:
        self.settings = settings
        self._environ: Mapping[str, str] | None = None

        from envtag.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def environ(self) -> Mapping[str, str]:
        """Process environment, layered over ``--env-file`` when given."""
        if self._environ is None:
            from envtag.infrastructure.environment import (
                layered_environment,
                process_environment,
                read_env_file,
            )

            environ = process_environment()
            if self.settings.env_file is not None:
                try:
                    file_values = read_env_file(self.settings.env_file)
                except FileNotFoundError as exc:
                    raise click.ClickException(str(exc)) from exc
                environ = layered_environment(environ, file_values)
            self._environ = environ
        return self._environ

    def service(self) -> InspectService:
        from envtag.services.inspect import InspectService

        return InspectService(environ=self.environ, tag=self.settings.tag)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
