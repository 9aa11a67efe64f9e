from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from typing import Optional, Any
from urllib.parse import quote_plus
import logging
import os

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "PathFinder AI"
    ENVIRONMENT: str = "development"  # development, production, test
    SECRET_KEY: str = "super-secret-key-change-in-production"
    SESSION_SECRET_KEY: str = "change-this-to-a-secure-random-string"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALLOWED_ORIGINS: list[str] = ["*"]

    # Database
    DATABASE_URL: str
    POSTGRES_URL: Optional[str] = None
    SEED_CATALOG: bool = True

    @model_validator(mode="before")
    @classmethod
    def check_database_url(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("DATABASE_URL"):
            return data

        if data.get("POSTGRES_URL"):
            data["DATABASE_URL"] = data["POSTGRES_URL"]
            return data

        # Managed Postgres hosts (Railway, Heroku) only expose PG* variables
        pg = {key: os.environ.get(key) for key in ("PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE")}
        if all(pg.values()):
            data["DATABASE_URL"] = (
                f"postgresql://{pg['PGUSER']}:{quote_plus(pg['PGPASSWORD'])}"
                f"@{pg['PGHOST']}:{pg['PGPORT']}/{pg['PGDATABASE']}"
            )
        return data

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> str:
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    # AI Gateway (any OpenAI-compatible chat completions endpoint)
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1"
    AI_API_KEY: Optional[str] = None
    AI_MODEL: str = "google/gemini-2.5-flash"

    # Monitoring (Sentry)
    SENTRY_DSN: Optional[str] = None

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "5/minute"
    RECOMMENDATION_RATE_LIMIT: str = "10/minute"

    # Feature Flags
    FEATURES: dict = {
        "ENABLE_CHATBOT": True,
        "ENABLE_QUIZ": True,
        "ENABLE_REGISTRATION": True,
    }

    class Config:
        env_file = ".env"
        extra = "ignore"  # Prevent crash on extra env vars


settings = Settings()

if not settings.AI_API_KEY:
    logger.warning("AI_API_KEY is missing. Recommendations will fail and chat runs in simulated mode.")
