"""Database engine creation"""

from sqlalchemy import Engine, create_engine

from src.core.settings import get_settings
from src.db.schema import Base


def make_engine(database_url: str | None = None) -> Engine:
    """Engine for the configured database, with all tables created."""
    engine = create_engine(database_url or get_settings().database_url)
    Base.metadata.create_all(bind=engine)
    return engine
