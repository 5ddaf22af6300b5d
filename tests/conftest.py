"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import GameRules
from src.core.shared_types import GameMode
from src.darts.factory import create_game_state
from src.darts.state import GameState
from src.db.schema import Base
from tests.helpers import TickingClock

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def rules() -> GameRules:
    """Standard rules with a deterministic clock."""
    return GameRules(clock=TickingClock())


@pytest.fixture
def countdown_game(rules: GameRules) -> GameState:
    """Two players, 501."""
    return create_game_state(["Alice", "Bob"], 501, GameMode.COUNTDOWN, rules=rules)


@pytest.fixture
def high_low_game(rules: GameRules) -> GameState:
    """Two players, 5 lives each."""
    return create_game_state(["Alice", "Bob"], 501, GameMode.HIGH_LOW, 5, rules=rules)
