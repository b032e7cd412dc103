"""Unified settings from CLI flags and env vars over code defaults.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click, or explicit arguments
  2. Env vars: ``FIELDFILL_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings


class FieldfillSettings(BaseSettings):
    """Settings for building a :class:`~fieldfill.services.filler.Filler`.

    Attributes:
        tag: Metadata key holding the default annotation.
        strict: Raise ``FillError`` after a pass with failed fields
            instead of leaving them at their zero value.
        implicit_env_key: Key consulted by selectors that name none.
        verbose: DEBUG-level logging for the ``fieldfill`` logger.
        log_json: JSON log lines instead of console rendering.
        json_output: CLI results as JSON.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FIELDFILL_",
    }

    tag: str = "default"
    strict: bool = False
    implicit_env_key: str = "EnvType"

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False
    json_output: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> FieldfillSettings:
        """Construct settings from CLI flags.

        Flags left at their click default (``None`` or ``False``) are dropped
        so ``FIELDFILL_*`` environment variables still apply.
        """
        overrides = {name: value for name, value in cli_flags.items() if value}
        return cls(**overrides)
