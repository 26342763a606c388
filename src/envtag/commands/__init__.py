"""Subcommand modules for envtag.

Provides register_commands() which uses deferred imports to keep
``envtag --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from envtag.commands.check import check
    from envtag.commands.describe import describe
    from envtag.commands.get import get

    cli.add_command(describe)
    cli.add_command(check)
    cli.add_command(get)
