# filmorate/core/settings.py
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- DB ---
    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")  # e.g. postgresql+asyncpg://...
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")
    seed_reference_data: bool = Field(default=True, alias="SEED_REFERENCE_DATA")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # --- API defaults ---
    top_films_default: int = Field(default=10, alias="TOP_FILMS_DEFAULT", ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

settings = Settings()
