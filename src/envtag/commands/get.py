"""Command: resolve and print a single variable."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envtag.commands._base import EnvtagCommand
from envtag.domain.types import TYPE_ALIASES, VariableType

if TYPE_CHECKING:
    from envtag.commands._context import AppContext

_TYPE_CHOICES = [t.value for t in VariableType] + [alias for alias in TYPE_ALIASES if alias]


@click.command(
    cls=EnvtagCommand,
    examples="""\
  envtag get APP_PORT --type port --default 8080
  envtag get APP_ENV --oneof 'dev|staging|prod'
  envtag get SENTRY_DSN --type url --optional""",
)
@click.argument("name")
@click.option(
    "-t",
    "--type",
    "type_name",
    type=click.Choice(_TYPE_CHOICES),
    default=VariableType.STRING.value,
    show_default=True,
    help="Variable type.",
)
@click.option("-d", "--default", default=None, help="Value used when NAME is unset or empty.")
@click.option("--optional", is_flag=True, help="Print the zero value instead of failing.")
@click.option("--oneof", default=None, help="Allowed values, separated by '|'.")
@click.pass_obj
def get(
    app: AppContext,
    name: str,
    type_name: str,
    default: str | None,
    optional: bool,
    oneof: str | None,
) -> None:
    """Resolve environment variable NAME and print its validated value."""
    choices = [choice.strip() for choice in oneof.split("|")] if oneof else None
    app.emit(
        app.service().get(
            name,
            type_name=type_name,
            default=default,
            optional=optional,
            oneof=choices,
        )
    )
