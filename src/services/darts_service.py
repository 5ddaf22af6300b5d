"""Orchestration of player actions: engine transitions, autosave, and undo for the current session."""

from dataclasses import replace
from typing import Optional

from src.core.config import (
    DEFAULT_RULES,
    DEFAULT_STARTING_LIVES,
    DEFAULT_STARTING_SCORE,
    GameRules,
)
from src.core.exceptions import GameStateError
from src.core.logging import get_logger
from src.core.shared_types import ChallengeDirection, GameMode
from src.darts.countdown import apply_countdown_score
from src.darts.factory import (
    create_game_state,
    validate_setup,
    validate_starting_values,
)
from src.darts.high_low import resolve_challenge, set_challenge
from src.darts.rankings import Ranking, countdown_rankings, high_low_rankings
from src.darts.state import GameState
from src.darts.turns import advance_turn, reset_game, start_game
from src.services.persistence import GamePersistence

logger = get_logger(__name__)


class DartsService:
    """
    Holds the current game of one scoring session.

    Every action runs one or more engine transitions, keeps the previous state for undo, and saves the result.
    A failed save is logged by the persistence adapter and does not affect the returned state.
    """

    def __init__(
        self, persistence: GamePersistence, rules: GameRules = DEFAULT_RULES
    ) -> None:
        self.persistence = persistence
        self.rules = rules
        self._state: Optional[GameState] = None
        self._undo_stack: list[GameState] = []

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise GameStateError("No game in progress. Start a new game or resume a saved one.")
        return self._state

    @property
    def has_game(self) -> bool:
        return self._state is not None

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    # --- GAME LIFECYCLE ---
    def new_game(
        self,
        names: list[str],
        mode: GameMode = GameMode.COUNTDOWN,
        starting_score: int = DEFAULT_STARTING_SCORE,
        lives: int = DEFAULT_STARTING_LIVES,
    ) -> GameState:
        """Validate the setup, build the game and save it. Replaces any game of this session."""
        validate_setup(names, mode, starting_score, lives)
        state = start_game(create_game_state(names, starting_score, mode, lives, self.rules))
        self._undo_stack.clear()
        self._set_state(state)
        logger.info("game_started", game_mode=str(mode), players=len(names))
        return state

    def resume(self) -> Optional[GameState]:
        """Pick up the saved game, if there is a readable one."""
        state = self.persistence.load()
        if state is not None:
            self._undo_stack.clear()
            self._state = state
            logger.info("game_resumed", game_mode=str(state.game_mode))
        return state

    def reset(
        self, starting_lives: Optional[int] = None, starting_score: Optional[int] = None
    ) -> GameState:
        """Same players, same mode, fresh scores. Overrides are checked like a new game's values."""
        current = self.state
        score = starting_score if starting_score is not None else current.starting_score
        lives = starting_lives if starting_lives is not None else current.starting_lives
        if lives is None:
            lives = DEFAULT_STARTING_LIVES
        validate_starting_values(current.game_mode, score, lives)
        state = start_game(reset_game(current, starting_lives, starting_score, self.rules))
        self._undo_stack.clear()
        self._set_state(state)
        logger.info("game_reset", game_mode=str(state.game_mode))
        return state

    def discard(self) -> None:
        """Drop the current game and its saved snapshot."""
        self._state = None
        self._undo_stack.clear()
        self.persistence.clear()

    def close(self) -> None:
        """Release the storage backend. The service must not be used afterwards."""
        self.persistence.close()

    # --- PLAYER ACTIONS ---
    def submit_score(self, player_id: str, thrown: int, end_turn: bool = True) -> GameState:
        """
        Record a visit for the player
        ----

        * Countdown: apply the score and, unless 'end_turn' is False or the game just ended, pass the turn on
        * High-Low: resolve the active challenge (which passes the turn on by itself)
        """
        before = self.state
        if before.game_mode == GameMode.HIGH_LOW:
            after = resolve_challenge(before, player_id, thrown, self.rules)
            logger.info(
                "challenge_resolved",
                player_id=player_id,
                thrown=thrown,
                passed=after.get_player(player_id).score_history[-1].passed_challenge,
                game_finished=after.game_finished,
            )
        else:
            after = apply_countdown_score(before, player_id, thrown, self.rules)
            logger.info(
                "score_submitted",
                player_id=player_id,
                thrown=thrown,
                bust=after.last_throw_was_bust,
                game_finished=after.game_finished,
            )
            if end_turn:
                bust = after.last_throw_was_bust
                after = advance_turn(after)
                # keep the bust visible to the score board until the next action
                if bust:
                    after = replace(after, last_throw_was_bust=True)
        return self._commit(before, after)

    def set_challenge(
        self,
        direction: ChallengeDirection,
        target: int,
        player_id: Optional[str] = None,
        challenger_id: Optional[str] = None,
    ) -> GameState:
        before = self.state
        after = set_challenge(
            before, direction, target, player_id, challenger_id=challenger_id, rules=self.rules
        )
        return self._commit(before, after)

    def next_turn(self) -> GameState:
        before = self.state
        return self._commit(before, advance_turn(before))

    def undo(self) -> GameState:
        """Restore the state before the last player action."""
        if not self._undo_stack:
            raise GameStateError("Nothing to undo.")
        state = self._undo_stack.pop()
        self._set_state(state)
        logger.info("action_undone", remaining=len(self._undo_stack))
        return state

    def rankings(self) -> list[Ranking]:
        state = self.state
        if state.game_mode == GameMode.HIGH_LOW:
            return high_low_rankings(state)
        return countdown_rankings(state)

    # -- Internal helpers --
    def _commit(self, before: GameState, after: GameState) -> GameState:
        if after is not before:
            self._undo_stack.append(before)
        self._set_state(after)
        return after

    def _set_state(self, state: GameState) -> None:
        self._state = state
        self.persistence.save(state)
