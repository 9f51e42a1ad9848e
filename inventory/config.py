from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (or a .env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./database.sqlite"
    SEED_DEMO_DATA: bool = False

    # Authentication
    JWT_SECRET: str = "b4you_secret_key_2024"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60

    # HTTP
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    MAX_BODY_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Client
    API_BASE_URL: str = "http://localhost:3001"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
