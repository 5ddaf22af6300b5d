"""Protocol repository (implemented with SQLAlchemy and with plain JSON files)"""

from typing import Protocol

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration. Games are stored under a string key, one snapshot per key."""

    def read(self, key: str) -> GameModel | None:
        """Get the snapshot stored under key, if a record exists."""
        ...

    def write(self, key: str, game: GameModel) -> None:
        """Store the snapshot under key, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove the snapshot stored under key (no-op when absent)."""
        ...

    def close(self) -> None:
        """Release whatever the repository holds open (sessions, handles)."""
        ...
