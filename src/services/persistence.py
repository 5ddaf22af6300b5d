"""
Save/load/clear adapter around a GameRepository.

Saving is best-effort: a failure is logged and swallowed, it must never undo or block the transition that triggered it.
A snapshot that cannot be read back is treated as "no saved game".
"""

from typing import Optional

from src.core.logging import get_logger
from src.darts.state import GameState
from src.db.repository import GameRepository

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "dart-score-manager-game-state"


class GamePersistence:
    def __init__(
        self, repository: GameRepository, key: str = DEFAULT_STORAGE_KEY
    ) -> None:
        self.repo = repository
        self.key = key

    def save(self, state: GameState) -> None:
        try:
            self.repo.write(self.key, state.to_model())
        except Exception as e:
            logger.warning("game_save_failed", key=self.key, error=str(e))
            return
        logger.debug("game_saved", key=self.key, game_mode=str(state.game_mode))

    def load(self) -> Optional[GameState]:
        try:
            model = self.repo.read(self.key)
            if model is None:
                return None
            state = GameState.from_model(model)
        except Exception as e:
            logger.warning("game_load_failed", key=self.key, error=str(e))
            return None
        logger.debug("game_loaded", key=self.key, game_mode=str(state.game_mode))
        return state

    def clear(self) -> None:
        try:
            self.repo.delete(self.key)
        except Exception as e:
            logger.warning("game_clear_failed", key=self.key, error=str(e))

    def close(self) -> None:
        self.repo.close()
