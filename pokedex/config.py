# pokedex/config.py
"""
Runtime settings for the Pokédex service.

Values come from the process environment (prefixed with ``POKEDEX_``)
or from a ``.env`` file in the working directory. Paths are kept
relative by default so the service can be run from the project root,
next to ``pokemon.csv``, ``images/`` and ``db.json``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POKEDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000

    db_path: Path = Path("db.json")
    csv_path: Path = Path("pokemon.csv")
    images_dir: Path = Path("images")
    public_dir: Path = Path("public")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Set up root logging once; later calls only adjust the level."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(settings.log_level)
