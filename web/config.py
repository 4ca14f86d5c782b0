"""Configuration for the TubeScan web service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from tubescan.ai_client import DEFAULT_BASE_URL, DEFAULT_MODEL

load_dotenv()



def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    secret_key: str
    database_url: str
    auto_create_schema: bool

    youtube_api_key: str
    max_videos: int
    top_videos: int
    history_limit: int

    ai_api_key: str
    ai_model: str
    ai_language: str
    ai_base_url: str

    log_level: str

    @staticmethod
    def from_env() -> "AppConfig":
        root = Path.cwd()
        default_db_path = root / '.tmp' / 'tubescan.db'
        default_db_path.parent.mkdir(parents=True, exist_ok=True)
        default_db = f"sqlite:///{default_db_path}"

        return AppConfig(
            app_env=os.getenv("APP_ENV", "development"),
            secret_key=os.getenv("SECRET_KEY", "dev-change-me"),
            database_url=os.getenv("DATABASE_URL", default_db),
            auto_create_schema=_env_bool("AUTO_CREATE_SCHEMA", True),
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            max_videos=int(os.getenv("MAX_VIDEOS", "20")),
            top_videos=int(os.getenv("TOP_VIDEOS", "10")),
            history_limit=int(os.getenv("HISTORY_LIMIT", "10")),
            ai_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            ai_model=os.getenv("AI_MODEL", DEFAULT_MODEL),
            ai_language=os.getenv("AI_LANGUAGE", "en"),
            ai_base_url=os.getenv("AI_BASE_URL", DEFAULT_BASE_URL),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def to_flask_config(self) -> dict:
        return {
            "APP_ENV": self.app_env,
            "SECRET_KEY": self.secret_key,
            "DATABASE_URL": self.database_url,
            "AUTO_CREATE_SCHEMA": self.auto_create_schema,
            "YOUTUBE_API_KEY": self.youtube_api_key,
            "MAX_VIDEOS": self.max_videos,
            "TOP_VIDEOS": self.top_videos,
            "HISTORY_LIMIT": self.history_limit,
            "AI_API_KEY": self.ai_api_key,
            "AI_MODEL": self.ai_model,
            "AI_LANGUAGE": self.ai_language,
            "AI_BASE_URL": self.ai_base_url,
            "LOG_LEVEL": self.log_level,
        }
