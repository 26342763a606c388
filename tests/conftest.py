"""Shared pytest fixtures for envtag tests."""

from __future__ import annotations

import importlib
import logging
import sys
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and envtag logger state after each test.

    The CLI configures logging on every invocation.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    envtag_logger = logging.getLogger("envtag")
    envtag_level = envtag_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    envtag_logger.setLevel(envtag_level)


@pytest.fixture
def config_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Callable[[str, str], str]]:
    """Write an importable module and return its ``module`` name.

    Used by CLI tests that take a ``module:ClassName`` target.
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    created: list[str] = []

    def write(name: str, source: str) -> str:
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        created.append(name)
        importlib.invalidate_caches()
        return name

    yield write

    for name in created:
        sys.modules.pop(name, None)
