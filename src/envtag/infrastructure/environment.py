"""Environment lookups: the process environment, ``.env`` files, layers.

Every lookup is a read-only ``Mapping[str, str]``; envtag never writes
to ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from collections import ChainMap
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def process_environment() -> Mapping[str, str]:
    """The live process environment."""
    return os.environ


def read_env_file(path: Path) -> dict[str, str]:
    """Parse a ``.env`` file without touching the process environment.

    Keys declared without a value (``KEY`` on its own line) are dropped.
    Raises FileNotFoundError if *path* does not exist.
    """
    if not path.is_file():
        msg = f"env file not found: {path}"
        raise FileNotFoundError(msg)
    values = {key: value for key, value in dotenv_values(path).items() if value is not None}
    logger.debug("Read %d variables from %s", len(values), path)
    return values


def layered_environment(*layers: Mapping[str, str]) -> Mapping[str, str]:
    """Combine lookups; the first layer that defines a key wins."""
    return ChainMap(*layers)  # type: ignore[arg-type]
