"""Command: load a configuration class and report what was resolved."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envtag.commands._base import EnvtagCommand

if TYPE_CHECKING:
    from envtag.commands._context import AppContext


@click.command(
    cls=EnvtagCommand,
    examples="""\
  envtag check myapp.config:Settings
  envtag --env-file .env check myapp.config:Settings
  envtag -q check myapp.config:Settings && ./run-server""",
)
@click.argument("target")
@click.pass_obj
def check(app: AppContext, target: str) -> None:
    """Load TARGET (``module:ClassName``) from the environment; exit 1 on failure."""
    from envtag.domain.errors import EnvError
    from envtag.services.inspect import import_target
    from envtag.services.result import ServiceError, ServiceResult

    try:
        target_cls = import_target(target)
    except EnvError as exc:
        app.emit(ServiceResult(ok=False, op="check", error=ServiceError.from_exception(exc)))
        return
    app.emit(app.service().check(target_cls))
