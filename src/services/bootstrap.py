"""Wire a DartsService from Settings: logging, house rules, storage backend and persistence key."""

from typing import Literal, Optional

from sqlalchemy.orm import sessionmaker

from src.core.config import GameRules
from src.core.logging import configure_logging
from src.core.settings import Settings, get_settings
from src.darts.policies import BUST_POLICIES
from src.db.database import make_engine
from src.db.json_repository import JSONFileGameRepository
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.services.darts_service import DartsService
from src.services.persistence import GamePersistence

StorageBackend = Literal["sql", "json"]


def build_repository(settings: Settings, backend: StorageBackend = "sql") -> GameRepository:
    """The SQL repository owns its session until close() is called on it."""
    if backend == "json":
        return JSONFileGameRepository(settings.storage_dir)
    session_factory = sessionmaker(bind=make_engine(settings.database_url))
    return SQLGameRepository(session_factory())


def build_rules(settings: Settings) -> GameRules:
    return GameRules(bust_policy=BUST_POLICIES[settings.bust_policy])


def create_service(
    settings: Optional[Settings] = None,
    backend: StorageBackend = "sql",
    rules: Optional[GameRules] = None,
) -> DartsService:
    """Explicit 'rules' win over the ones described by the settings."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)
    persistence = GamePersistence(build_repository(settings, backend), settings.storage_key)
    return DartsService(persistence, rules or build_rules(settings))
