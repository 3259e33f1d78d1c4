from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import os


def _appdata_dir() -> Path:
    base = os.getenv("APPDATA") or str(Path.home() / ".local" / "share")
    return Path(base) / "PersonalPlanner"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PL_", case_sensitive=False)

    app_name: str = "Personal Planner"

    # Base roaming app data dir (e.g., %APPDATA%\PersonalPlanner)
    appdata_dir: Path = Field(default_factory=_appdata_dir)
    data_dir: Path = Field(default_factory=lambda: _appdata_dir() / "data")
    logs_dir: Path = Field(default_factory=lambda: _appdata_dir() / "logs")

    database_path: Path = Field(default_factory=lambda: _appdata_dir() / "data" / "planner.db")
    # Full SQLAlchemy URL; takes precedence over database_path when set
    database_url: Optional[str] = None

    # IANA zone used for "local" calendar days; None -> process local time
    timezone: Optional[str] = None

    # Used when a request carries no X-User-Id header (single-user installs)
    default_user_id: str = "local"

    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or f"sqlite:///{self.database_path}"

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        return ZoneInfo(self.timezone) if self.timezone else None

    def ensure_dirs(self) -> None:
        for d in [self.appdata_dir, self.data_dir, self.logs_dir]:
            d.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()
