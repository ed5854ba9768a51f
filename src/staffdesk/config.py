from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Staffdesk"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 8788
    log_level: str = "INFO"
    cors_origins: str = "http://127.0.0.1:8788"

    default_actor: str = "System"
    seed_fixtures: bool = True

    vacancy_min_note_length: int = 10
    company_min_note_length: int = 1
    company_max_note_length: int = 500

    vacancy_page_size: int = 50
    company_page_size: int = 20
    max_page_size: int = 200

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("vacancy_min_note_length", "company_min_note_length")
    @classmethod
    def validate_note_floor(cls, value: int) -> int:
        if value < 1:
            raise ValueError("note length floor must be at least 1")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
