# foodorder/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string, or sqlite:// for local dev)
      - JWT_SECRET (signing secret for issued access tokens)

    Optional:
      - ENVIRONMENT ("production" turns on secure cookies)
      - JWT_EXPIRE_DAYS (token lifetime, default 30 days)
    """

    PROJECT_NAME: str = "Food Ordering API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str

    # JWT issuing / verification
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    JWT_EXPIRE_DAYS: int = 30

    # development | production
    ENVIRONMENT: str = "development"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
