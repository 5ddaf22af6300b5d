"""Build the initial players and game state for a chosen mode."""

from typing import Iterable, Optional
from uuid import uuid4

from src.core.config import (
    DEFAULT_RULES,
    DEFAULT_STARTING_LIVES,
    DEFAULT_STARTING_SCORE,
    MAX_PLAYER_NAME_LENGTH,
    MAX_PLAYERS,
    MAX_STARTING_LIVES,
    MIN_PLAYERS,
    MIN_STARTING_LIVES,
    GameRules,
)
from src.core.exceptions import InvalidSetupError
from src.core.shared_types import GameMode
from src.darts.state import GameState, Player


def new_player_id() -> str:
    return uuid4().hex


def create_player(
    name: str,
    starting_score: int = DEFAULT_STARTING_SCORE,
    mode: GameMode = GameMode.COUNTDOWN,
    lives: int = DEFAULT_STARTING_LIVES,
    rules: GameRules = DEFAULT_RULES,
) -> Player:
    """
    Create a fresh player
    ----

    High-Low players always start from the challenge baseline (40) whatever starting score is passed,
    Countdown players start from 'starting_score' and carry no lives.
    """
    if mode == GameMode.HIGH_LOW:
        return Player(
            id=new_player_id(),
            name=name.strip(),
            score=rules.high_low_baseline,
            turn_start_score=rules.high_low_baseline,
            lives=lives,
        )
    return Player(
        id=new_player_id(),
        name=name.strip(),
        score=starting_score,
        turn_start_score=starting_score,
    )


def create_game_state(
    names: Iterable[str],
    starting_score: int = DEFAULT_STARTING_SCORE,
    mode: GameMode = GameMode.COUNTDOWN,
    lives: int = DEFAULT_STARTING_LIVES,
    rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """The roster size is not checked here, use validate_setup() before calling this with user input."""
    players = tuple(
        create_player(name, starting_score, mode, lives, rules) for name in names
    )
    return GameState(
        players=players,
        game_mode=mode,
        starting_score=starting_score,
        starting_lives=lives if mode == GameMode.HIGH_LOW else None,
    )


def validate_setup(
    names: list[str],
    mode: GameMode = GameMode.COUNTDOWN,
    starting_score: int = DEFAULT_STARTING_SCORE,
    lives: int = DEFAULT_STARTING_LIVES,
) -> None:
    """Reject a configuration before any state gets built for it."""
    if len(names) < MIN_PLAYERS:
        raise InvalidSetupError(f"At least {MIN_PLAYERS} players are required to start a game.")
    if len(names) > MAX_PLAYERS:
        raise InvalidSetupError(f"Maximum {MAX_PLAYERS} players allowed.")

    trimmed = [name.strip() for name in names]
    for name in trimmed:
        if not 1 <= len(name) <= MAX_PLAYER_NAME_LENGTH:
            raise InvalidSetupError(
                f"Player name must be between 1 and {MAX_PLAYER_NAME_LENGTH} characters, got {name!r}."
            )
    if len({name.casefold() for name in trimmed}) != len(trimmed):
        raise InvalidSetupError("Player names must be unique.")

    validate_starting_values(mode, starting_score, lives)


def validate_starting_values(
    mode: GameMode, starting_score: int, lives: Optional[int]
) -> None:
    """Starting score (Countdown) and lives (High-Low) checks, shared by new games and resets."""
    if mode == GameMode.COUNTDOWN and starting_score <= 0:
        raise InvalidSetupError("Starting score must be greater than 0.")
    if mode == GameMode.HIGH_LOW and (
        lives is None or not MIN_STARTING_LIVES <= lives <= MAX_STARTING_LIVES
    ):
        raise InvalidSetupError(
            f"Starting lives must be between {MIN_STARTING_LIVES} and {MAX_STARTING_LIVES}."
        )
