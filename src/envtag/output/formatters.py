"""Rich/JSON rendering of ServiceResult.

The CLI renders results for humans (Rich tables) or machines (--json).
Renderers are picked by ``result.op``; unknown operations fall back to
key-value lines.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from envtag.output.console import create_console, get_output, style_for_source

if TYPE_CHECKING:
    from rich.console import Console

    from envtag.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the CLI settings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _render_describe(result: ServiceResult, console: Console, settings: OutputSettings) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="envtag.field", no_wrap=True)
    table.add_column("Variable", style="envtag.variable", no_wrap=True)
    table.add_column("Type", style="envtag.type")
    table.add_column("Default")
    table.add_column("Optional")
    table.add_column("Choices")
    table.add_column("Description", style="envtag.dim")

    for row in result.data.get("variables", []):
        if row["skipped"] and not settings.verbose:
            continue
        cells = [
            row["field"],
            _cell(row["variable"]),
            row["type"],
            _cell(row["default"]),
            "yes" if row["optional"] else "",
            "|".join(_cell(c) for c in row["oneof"]),
            row["description"],
        ]
        table.add_row(*(Text(cell) for cell in cells))
    console.print(table)


def _render_check(result: ServiceResult, console: Console, settings: OutputSettings) -> None:
    sources: dict[str, str] = result.data.get("sources", {})
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="envtag.field", no_wrap=True)
    table.add_column("Value")
    table.add_column("Source")

    for field_name, value in result.data.get("values", {}).items():
        source = sources.get(field_name, "")
        if not source and not settings.verbose:
            continue
        table.add_row(
            Text(field_name),
            Text(_cell(value)),
            Text(source, style=style_for_source(source)),
        )
    console.print(table)


def _render_get(result: ServiceResult, console: Console, settings: OutputSettings) -> None:
    console.print(Text(_cell(result.data.get("value"))))


_RENDERERS: dict[str, Callable[[ServiceResult, Console, OutputSettings], None]] = {
    "describe": _render_describe,
    "check": _render_check,
}


def _render_data(result: ServiceResult, console: Console) -> None:
    for key, value in result.data.items():
        console.print(Text(f"  {key}: {_cell(value)}"))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    ``get`` prints the bare value so it can be captured by shell scripts.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=True)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        console.print(
            Text("ERROR", style="envtag.error"),
            Text(result.op, style="envtag.op"),
            Text(f"- {message}"),
        )
        return get_output(console).rstrip("\n")

    if result.op == "get":
        _render_get(result, console, settings)
        return get_output(console).rstrip("\n")

    console.print(Text("OK", style="envtag.ok"), Text(result.op, style="envtag.op"))
    if not settings.quiet:
        renderer = _RENDERERS.get(result.op)
        if renderer is None:
            _render_data(result, console)
        else:
            renderer(result, console, settings)
    return get_output(console).rstrip("\n")
