# backend/config.py
from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    # Relational store. Required in production, SQLite file otherwise.
    DATABASE_URL: Optional[str] = Field(
        None, validation_alias=AliasChoices("DATABASE_URL", "POSTGRES_URL")
    )
    SQLITE_PATH: str = "./roadmaster.db"
    DB_TIMEOUT_SECONDS: float = 10.0

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    DEFAULT_ROLE: str = "Site Engineer"
    AVATAR_BASE_URL: str = "https://ui-avatars.com/api/"
    FRONTEND_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def database_url(self) -> str:
        url = self.DATABASE_URL or f"sqlite:///{self.SQLITE_PATH}"
        # SQLAlchemy only understands the postgresql:// scheme
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    @model_validator(mode="after")
    def _require_database_in_production(self):
        if self.is_production and not self.DATABASE_URL:
            raise ValueError("DATABASE_URL (or POSTGRES_URL) must be set when ENVIRONMENT=production")
        return self


settings = Settings()
