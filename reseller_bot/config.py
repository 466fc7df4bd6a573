"""
Runtime configuration for ResellerBot.

Settings are read from the process environment.  A ``.env`` file in the
working directory is loaded first when present so local setups do not need
to export anything by hand.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

# Category whose new text channels receive the button panel.
DEFAULT_PANEL_CATEGORY_ID = 1163983820245180446

_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BotConfig:
    token: str
    panel_category_id: int = DEFAULT_PANEL_CATEGORY_ID
    throw_on_error: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, *, load_env_file: bool = True) -> "BotConfig":
        """
        Build a configuration from ``environ`` (defaults to ``os.environ``).

        Raises ``ValueError`` when ``DISCORD_TOKEN`` is missing or
        ``PANEL_CATEGORY_ID`` is not a positive integer.
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ if environ is None else environ

        token = (env.get("DISCORD_TOKEN") or "").strip()
        if not token:
            raise ValueError("DISCORD_TOKEN is not set")

        raw_category = (env.get("PANEL_CATEGORY_ID") or "").strip()
        if raw_category:
            try:
                category_id = int(raw_category)
            except ValueError:
                raise ValueError(f"PANEL_CATEGORY_ID must be an integer, got {raw_category!r}") from None
            if category_id <= 0:
                raise ValueError(f"PANEL_CATEGORY_ID must be positive, got {category_id}")
        else:
            category_id = DEFAULT_PANEL_CATEGORY_ID

        throw_on_error = (env.get("THROW_ON_ERROR") or "").strip().lower() not in _FALSY
        log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()

        return cls(
            token=token,
            panel_category_id=category_id,
            throw_on_error=throw_on_error,
            log_level=log_level,
        )
