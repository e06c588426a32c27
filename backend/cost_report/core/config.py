"""
Application Configuration
Settings loaded from environment variables and .env
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = "development"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure critical settings are configured in production"""
        if self.ENVIRONMENT == "production":
            if "sqlite" in self.DATABASE_URL:
                raise ValueError(
                    "Production must use PostgreSQL! Please set DATABASE_URL environment variable."
                )
            if not self.LLM_API_KEY:
                raise ValueError(
                    "LLM_API_KEY must be set in production! "
                    "Reports cannot be generated without the upstream API credential."
                )
        return self

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"  # DEBUG, INFO, WARNING, ERROR

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database (SQLite for development, PostgreSQL for production)
    DATABASE_URL: str = "sqlite+aiosqlite:///./cost_report.db"
    # backend_pre_start: how long to wait for the database before giving up
    DB_WAIT_MAX_TRIES: int = 300
    DB_WAIT_SECONDS: float = 1.0

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",  # Next.js dev server
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Upstream chat-completion API (OpenAI compatible)
    LLM_PROVIDER: str = "xai"
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.x.ai/v1"
    LLM_MODEL: str = "grok-beta"
    LLM_TEMPERATURE: float = 0.0
    LLM_MAX_TOKENS: int = 2000

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
