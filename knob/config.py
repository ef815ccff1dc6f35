from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class KnobConfig(BaseSettings):
    """Configuration for knob itself.

    Values are loaded from ``KNOB_*`` environment variables (or ``.env``) and
    may be overridden via CLI flags by the ``knob`` entrypoint.
    """

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["plain", "json"] = "plain"

    # Usage text
    usage_width: PositiveInt = 78

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="KNOB_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


@lru_cache(maxsize=1)
def get_config() -> KnobConfig:
    return KnobConfig()
