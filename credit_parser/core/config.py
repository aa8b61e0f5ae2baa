from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    log_level: str = "WARNING"
    log_format: str = "console"  # json or console

    # Dialect and vocabulary
    dialect: str = "default"
    dialect_dir: Optional[str] = None  # searched before the packaged dialects
    vocabulary: str = "musicbrainz"
    vocabulary_dir: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="CREDIT_PARSER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
