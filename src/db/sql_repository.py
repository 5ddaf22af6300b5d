"""Implementation of (Game)Repository using SQLAlchemy"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def read(self, key: str) -> GameModel | None:
        """Get the snapshot stored under key, if a record exists."""
        game_db = self._fetch_game(key)
        if game_db:
            return self._to_model(game_db)
        return None

    def write(self, key: str, game: GameModel) -> None:
        """Store the snapshot under key, replacing any previous one."""
        snapshot = game.model_dump(mode="json")
        game_db = self._fetch_game(key)
        if game_db is None:
            game_db = DBGame(
                key=key,
                game_mode=str(game.game_mode),
                game_finished=game.game_finished,
                snapshot=snapshot,
            )
            self.db.add(game_db)
        else:
            game_db.game_mode = str(game.game_mode)
            game_db.game_finished = game.game_finished
            game_db.snapshot = snapshot
        self._commit()

    def delete(self, key: str) -> None:
        """Remove the snapshot stored under key (no-op when absent)."""
        game_db = self._fetch_game(key)
        if not game_db:
            return
        self.db.delete(game_db)
        self._commit()

    def close(self) -> None:
        self.db.close()

    def _fetch_game(self, key: str) -> DBGame | None:
        query = select(DBGame).where(DBGame.key == key)
        return self.db.scalar(query)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Could not store game: {e}") from e

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel.model_validate(game_db.snapshot)
