"""
Config loading via Pydantic v2 and python-dotenv.

Values come from the process environment; a `.env` file at the repository
root is loaded first but never overrides variables that are already set.
"""

from __future__ import annotations

from functools import lru_cache
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BASE_DIR / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=False)


class DatabaseConfig(BaseModel):
    url: str = Field(default=f"sqlite:///{BASE_DIR / 'slotbook.db'}")
    echo: bool = False


class SchedulingConfig(BaseModel):
    # 60 min session + 30 min break is the classic 90-minute therapy grid
    default_session_minutes: int = Field(default=60, ge=15, le=240)
    default_break_minutes: int = Field(default=30, ge=0, le=60)
    max_available_per_day: Optional[int] = Field(default=None, ge=1)
    max_range_days: int = Field(default=62, ge=1)


class LoggingConfig(BaseModel):
    logs_dir: Path = Field(default_factory=lambda: BASE_DIR / "logs")
    log_level: str = Field(default="INFO")
    max_bytes: int = Field(default=5 * 1024 * 1024)  # 5 MB
    backup_count: int = Field(default=5)


class Settings(BaseModel):
    database: DatabaseConfig = DatabaseConfig()
    scheduling: SchedulingConfig = SchedulingConfig()
    logging: LoggingConfig = LoggingConfig()


def _optional_int(value: str | None) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


@lru_cache
def get_settings() -> Settings:
    """
    Load and cache settings.

    Raises ValidationError if the environment holds out-of-range values.
    """
    env = os.environ

    database = DatabaseConfig(
        url=env.get("DATABASE_URL", DatabaseConfig().url),
        echo=env.get("DATABASE_ECHO", "false").lower() in ("1", "true", "yes"),
    )
    scheduling = SchedulingConfig(
        default_session_minutes=int(env.get("DEFAULT_SESSION_MINUTES", "60")),
        default_break_minutes=int(env.get("DEFAULT_BREAK_MINUTES", "30")),
        max_available_per_day=_optional_int(env.get("MAX_AVAILABLE_PER_DAY")),
        max_range_days=int(env.get("MAX_RANGE_DAYS", "62")),
    )
    logging_cfg = LoggingConfig(
        logs_dir=Path(env.get("LOGS_DIR", str(BASE_DIR / "logs"))),
        log_level=env.get("LOG_LEVEL", "INFO"),
        max_bytes=int(env.get("LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backup_count=int(env.get("LOG_BACKUP_COUNT", "5")),
    )
    return Settings(database=database, scheduling=scheduling, logging=logging_cfg)


__all__ = ["Settings", "get_settings", "BASE_DIR"]
