"""
Turn rotation and the transitions shared by both modes (start, reset), plus the guards the mode specific rules use.
"""

from dataclasses import replace
from typing import Optional

from src.core.config import DEFAULT_RULES, DEFAULT_STARTING_LIVES, GameRules
from src.core.exceptions import GameFinishedError, InvalidScoreError, WrongModeError
from src.core.shared_types import GameMode
from src.darts.state import GameState, Player


# --- GUARDS ---
def validate_throw(thrown: int, rules: GameRules = DEFAULT_RULES) -> None:
    """A visit is an integer between 0 and 180 (bools are not accepted as integers)."""
    if isinstance(thrown, bool) or not isinstance(thrown, int):
        raise InvalidScoreError(f"Score must be a whole number, got {thrown!r}.")
    if not rules.min_throw <= thrown <= rules.max_throw:
        raise InvalidScoreError(
            f"Score must be between {rules.min_throw} and {rules.max_throw}, got {thrown}."
        )


def assert_mode(state: GameState, mode: GameMode) -> None:
    if state.game_mode != mode:
        raise WrongModeError(
            f"This action is only available in {mode} games, this game is {state.game_mode}."
        )


def assert_in_progress(state: GameState) -> None:
    if state.game_finished:
        raise GameFinishedError("The game is already finished. Reset or start a new game.")


# --- ROTATION ---
def current_player(state: GameState) -> Optional[Player]:
    return state.current_player


def advance_turn(state: GameState) -> GameState:
    """
    Hand the turn to the next player
    ----

    * finished game: returned unchanged
    * Countdown: next seat, whose turn_start_score is captured as the bust-revert baseline of the new turn
    * High-Low: next seat that still has lives, probing at most once per player. With nobody eligible the index stays put.
    """
    if state.game_finished or not state.players:
        return state

    total_players = len(state.players)

    if state.game_mode == GameMode.HIGH_LOW:
        next_index = state.current_player_index
        for _ in range(total_players):
            next_index = (next_index + 1) % total_players
            if not state.players[next_index].is_eliminated:
                break
        else:
            next_index = state.current_player_index
        return replace(state, current_player_index=next_index, last_throw_was_bust=False)

    next_index = (state.current_player_index + 1) % total_players
    next_player = state.players[next_index]
    return state.with_player(
        next_index,
        replace(next_player, turn_start_score=next_player.score),
        current_player_index=next_index,
        last_throw_was_bust=False,
    )


def start_game(state: GameState) -> GameState:
    """Capture the opening player's turn_start_score (Countdown). High-Low states are returned as is."""
    if state.game_mode != GameMode.COUNTDOWN or state.current_player is None:
        return state
    player = state.current_player
    return state.with_player(
        state.current_player_index, replace(player, turn_start_score=player.score)
    )


def reset_game(
    state: GameState,
    starting_lives: Optional[int] = None,
    starting_score: Optional[int] = None,
    rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """
    Put every player back on the mode's baseline, keeping the roster (ids and names) and the mode.

    Overrides replace the stored starting values, so resetting twice gives the same state as resetting once.
    """
    lives = starting_lives if starting_lives is not None else state.starting_lives
    if lives is None:
        lives = DEFAULT_STARTING_LIVES
    score = starting_score if starting_score is not None else state.starting_score

    if state.game_mode == GameMode.HIGH_LOW:
        players = tuple(
            replace(
                player,
                score=rules.high_low_baseline,
                turn_start_score=rules.high_low_baseline,
                lives=lives,
                is_winner=False,
                score_history=(),
            )
            for player in state.players
        )
    else:
        players = tuple(
            replace(
                player,
                score=score,
                turn_start_score=score,
                lives=None,
                is_winner=False,
                score_history=(),
            )
            for player in state.players
        )

    return replace(
        state,
        players=players,
        starting_score=score,
        starting_lives=lives if state.game_mode == GameMode.HIGH_LOW else state.starting_lives,
        current_player_index=0,
        game_finished=False,
        winner_id=None,
        last_throw_was_bust=False,
        high_low_challenge=None,
        pending_challenge_setter=None,
    )
