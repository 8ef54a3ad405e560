from __future__ import annotations

from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


def _default_data_dir() -> Path:
    return Path.home() / ".meeting_manager"


class Settings(BaseSettings):
    app_name: str = "Meeting Manager"

    data_dir: Path = Field(default_factory=_default_data_dir)
    # Defaults to data_dir/logs when unset
    logs_dir: Optional[Path] = None

    # Any SQLAlchemy URL; SQLite file under data_dir when unset
    database_url: Optional[str] = None

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ]
    )

    # How far ahead reminders are looked up
    reminder_lookahead_minutes: int = 120

    # Identity; no password means the API runs open
    auth_password: Optional[str] = None
    auth_secret: str = "meeting-manager-default-secret"
    session_ttl_hours: int = 24 * 7

    log_level: str = "INFO"

    class Config:
        env_prefix = "MM_"
        case_sensitive = False

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'meetings.db'}"

    @property
    def resolved_logs_dir(self) -> Path:
        return self.logs_dir or self.data_dir / "logs"

    def ensure_dirs(self) -> None:
        for d in [self.data_dir, self.resolved_logs_dir]:
            d.mkdir(parents=True, exist_ok=True)
