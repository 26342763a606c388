"""envtag's own settings: CLI flags and ``ENVTAG_*`` env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``ENVTAG_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from envtag.infrastructure.fields import DEFAULT_TAG


class EnvtagSettings(BaseSettings):
    """Settings for the envtag CLI, frozen after construction.

    Attributes:
        tag: Field metadata key holding rule strings.
        env_file: Optional ``.env`` file layered under the process environment.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ENVTAG_",
    }

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Loading ---
    tag: str = DEFAULT_TAG
    env_file: Path | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and env vars; ``.env`` files are handled by the loader."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> EnvtagSettings:
        """Construct settings from a CLI invocation.

        Flags left at None (options not given) fall through to env vars
        and defaults.
        """
        return cls(**{key: value for key, value in cli_flags.items() if value is not None})
