"""
High-Low challenge rules.

A challenge asks one player to throw higher (or lower) than a target. Beating it keeps the player's lives,
anything else, including an equal score, costs one life. The last player with lives left wins.
"""

from dataclasses import replace
from typing import Optional

from src.core.config import DEFAULT_RULES, GameRules
from src.core.exceptions import (
    InvalidChallengeError,
    NoActiveChallengeError,
    WrongPlayerError,
)
from src.core.shared_types import ChallengeDirection, GameMode
from src.darts.state import GameState, HighLowChallenge, ScoreHistoryEntry
from src.darts.turns import advance_turn, assert_in_progress, assert_mode, validate_throw


def set_challenge(
    state: GameState,
    direction: ChallengeDirection,
    target: int,
    player_id: Optional[str] = None,
    *,
    challenger_id: Optional[str] = None,
    rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """
    Register the challenge 'player_id' must beat with their next throw.

    'player_id' defaults to the current player, 'challenger_id' to the player who resolved the previous challenge.
    Any earlier challenge is replaced.
    """
    assert_mode(state, GameMode.HIGH_LOW)
    assert_in_progress(state)
    validate_throw(target, rules)
    try:
        direction = ChallengeDirection(direction)
    except ValueError as e:
        raise InvalidChallengeError(
            f"Challenge direction must be 'higher' or 'lower', got {direction!r}."
        ) from e

    if player_id is None:
        target_player = state.current_player
        if target_player is None:
            raise WrongPlayerError("There is no current player to challenge.")
    else:
        target_player = state.get_player(player_id)
    if target_player.is_eliminated:
        raise WrongPlayerError(f"{target_player.name} is eliminated and cannot be challenged.")

    if challenger_id is None:
        challenger_id = state.pending_challenge_setter
    else:
        state.get_player(challenger_id)

    challenge = HighLowChallenge(
        player_id=target_player.id,
        direction=direction,
        target_score=target,
        challenger_id=challenger_id,
    )
    return replace(state, high_low_challenge=challenge)


def resolve_challenge(
    state: GameState, player_id: str, thrown: int, rules: GameRules = DEFAULT_RULES
) -> GameState:
    """
    Settle the active challenge with the challenged player's throw
    ----

    1. validate mode, the active challenge, the player and the thrown value
    2. success: the throw becomes the player's score, lives unchanged
    3. failure: one life lost. With at most one player left alive the game ends (winner may be None if nobody survives)
    4. clear the challenge, remember the thrower as the setter of the next one, advance the turn from the thrower's seat
    """
    assert_mode(state, GameMode.HIGH_LOW)
    challenge = state.high_low_challenge
    if challenge is None:
        raise NoActiveChallengeError("No challenge has been set for this turn.")
    if challenge.player_id != player_id:
        raise WrongPlayerError(
            f"The active challenge is for player {challenge.player_id!r}, not {player_id!r}."
        )
    validate_throw(thrown, rules)
    player_index = state.player_index(player_id)
    player = state.players[player_index]

    passed = challenge.is_beaten_by(thrown)
    lives_before = player.lives if player.lives is not None else 0
    lives_after = lives_before if passed else lives_before - 1
    entry = ScoreHistoryEntry(
        score=thrown,
        previous_score=player.score,
        timestamp=rules.clock(),
        turn_number=player.next_turn_number,
        challenge_direction=challenge.direction,
        challenge_target=challenge.target_score,
        challenger_id=challenge.challenger_id,
        passed_challenge=passed,
        lives_before=lives_before,
        lives_after=lives_after,
    )

    next_state = state.with_player(
        player_index,
        player.record(entry, score=thrown, lives=lives_after),
        current_player_index=player_index,
        high_low_challenge=None,
        pending_challenge_setter=player.id,
    )
    if not passed:
        next_state = _settle_if_decided(next_state)
    return advance_turn(next_state)


def _settle_if_decided(state: GameState) -> GameState:
    """Finish the game once at most one player has lives left."""
    survivors = state.players_with_lives
    if len(survivors) > 1:
        return state
    if not survivors:
        return replace(state, game_finished=True, winner_id=None)

    winner = survivors[0]
    return state.with_player(
        state.player_index(winner.id),
        replace(winner, is_winner=True),
        game_finished=True,
        winner_id=winner.id,
    )
