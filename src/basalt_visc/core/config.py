from __future__ import annotations
import os
import logging
from typing import Union
from pydantic import BaseModel, ConfigDict

from basalt_visc.core.exceptions import ConfigError

_FALSE_WORDS = {"0", "false", "no", "off"}

class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: str = "INFO"
    enable_mock: bool = True
    sheet: Union[int, str] = 0

def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSE_WORDS

def _env_sheet(name: str) -> Union[int, str]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return 0
    return int(raw) if raw.isdigit() else raw

def load_settings() -> Settings:
    level = (os.getenv("BASALT_LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level in BASALT_LOG_LEVEL: '{level}'")
    return Settings(
        log_level=level,
        enable_mock=_env_flag("BASALT_ENABLE_MOCK", True),
        sheet=_env_sheet("BASALT_SHEET"),
    )

def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
