from __future__ import annotations

import logging
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Directory holding one JSON document per persisted record
    DATA_DIR: str = ".ironguide"

    # Estimation constants
    DEFAULT_BODY_WEIGHT_KG: float = 75.0
    SECONDS_PER_REP: int = 4

    # UI policies
    TIMER_POLL_MS: int = 200
    WATER_GOAL_ML: int = 4000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Allow Streamlit Cloud secrets to override or provide env values
    overrides: dict = {}
    try:
        import streamlit as _st  # type: ignore
        sec = getattr(_st, "secrets", None)
        if sec:
            for k in ["APP_ENV", "LOG_LEVEL", "DATA_DIR", "DEFAULT_BODY_WEIGHT_KG"]:
                if k in sec and sec[k] is not None and sec[k] != "":
                    overrides[k] = sec[k]
    except Exception:
        # No streamlit runtime or no secrets.toml; plain env settings apply
        pass
    return Settings(**overrides)  # type: ignore[call-arg]


_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the root logger once per process."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    lvl = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, lvl, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _LOGGING_CONFIGURED = True
