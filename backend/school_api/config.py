from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application runtime configuration."""

    database_url: str = Field(
        default=f"sqlite:///{(Path(__file__).resolve().parents[2] / 'data' / 'school.db')}"
    )
    api_prefix: str = ""
    jwt_secret: str = Field(default="school-api-dev-secret")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_in: str = Field(default="1h")  # seconds, or a number with s/m/h/d
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    default_page_size: int = Field(default=10, ge=1)
    log_level: str = Field(default="INFO")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SCHOOL_API_")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
