"""Settings for the outer layers (storage and logging). The engine itself never reads the environment."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "DARTS_", "case_sensitive": False}

    database_url: str = Field(
        default="sqlite:///darts.db",
        description="SQLAlchemy URL of the database holding saved games",
    )
    storage_dir: Path = Field(
        default=Path(".darts"),
        description="Directory used by the JSON file repository",
    )
    storage_key: str = Field(
        default="dart-score-manager-game-state",
        description="Key the current game is saved under",
    )
    bust_policy: Literal["standard", "double-out"] = Field(
        default="standard",
        description="Countdown finishing rule used by services built from these settings",
    )
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(default=True, description="JSON logs instead of console output")


@lru_cache
def get_settings() -> Settings:
    return Settings()
