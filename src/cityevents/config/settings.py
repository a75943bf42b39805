from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from ..validators.config_validators import to_lowercase, to_uppercase

# config -> cityevents -> src -> repository root
ENV_FILE = Path(__file__).resolve().parents[3] / ".env"


class Settings(BaseSettings):
    """
    Service configuration, read from the environment and the repository `.env`.
    """

    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # --- Database ---
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "cityevents"

    TESTING: bool = False
    TEST_POSTGRES_DB: str | None = None

    # Full async URL (e.g. sqlite+aiosqlite:///./cityevents.db); replaces the POSTGRES_* values
    DATABASE_URL_OVERRIDE: str | None = None

    SQLALCHEMY_ECHO: bool = False
    # create_all() + reference cities/events at startup
    SEED_ON_STARTUP: bool = False

    # --- Logging ---
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/cityevents")
    LOG_MAX_BYTES: int = 10_000_000
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def DATABASE_URL(self) -> str:
        """
        Connection URL for the engine.

        The override is used verbatim; otherwise a Postgres URL is built,
        pointing at TEST_POSTGRES_DB while TESTING is on.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        database = self.TEST_POSTGRES_DB if self.TESTING and self.TEST_POSTGRES_DB else self.POSTGRES_DB
        url = URL.create(
            drivername=f"postgresql+{self.POSTGRES_DRIVER}",
            username=self.POSTGRES_USERNAME,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            database=database,
        )
        return url.render_as_string(hide_password=False)

    # Case is normalised before the Literal check, so LOG_LEVEL=debug is accepted
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v):
        return to_lowercase(v)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
