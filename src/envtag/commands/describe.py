"""Command: list the variables a configuration class declares."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envtag.commands._base import EnvtagCommand

if TYPE_CHECKING:
    from envtag.commands._context import AppContext


@click.command(
    cls=EnvtagCommand,
    examples="""\
  envtag describe myapp.config:Settings
  envtag --json describe myapp.config:Settings
  envtag --tag config describe myapp.config:Settings""",
)
@click.argument("target")
@click.pass_obj
def describe(app: AppContext, target: str) -> None:
    """Describe the variables declared by TARGET (``module:ClassName``)."""
    from envtag.domain.errors import EnvError
    from envtag.services.inspect import import_target
    from envtag.services.result import ServiceError, ServiceResult

    try:
        target_cls = import_target(target)
    except EnvError as exc:
        app.emit(ServiceResult(ok=False, op="describe", error=ServiceError.from_exception(exc)))
        return
    app.emit(app.service().describe(target_cls))
