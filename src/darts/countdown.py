"""
Countdown scoring rule.

Players count down from the starting score and must land on exactly zero. A visit that the bust policy rejects
sends the player back to the score they had when their turn started.
"""

from dataclasses import replace

from src.core.config import DEFAULT_RULES, GameRules
from src.core.shared_types import GameMode
from src.darts.state import GameState, ScoreHistoryEntry
from src.darts.turns import assert_in_progress, assert_mode, validate_throw


def apply_countdown_score(
    state: GameState, player_id: str, thrown: int, rules: GameRules = DEFAULT_RULES
) -> GameState:
    """
    Subtract a visit from a player's score
    ----

    1. validate mode, game status, the thrown value and the player
    2. ask the bust policy about the would-be remainder
    3. bust: revert to turn_start_score and flag the state
    4. otherwise: commit the new score, and finish the game when it reaches zero

    Both paths append a history entry. The turn is NOT advanced here.
    """
    assert_mode(state, GameMode.COUNTDOWN)
    assert_in_progress(state)
    validate_throw(thrown, rules)
    player_index = state.player_index(player_id)
    player = state.players[player_index]

    new_score = player.score - thrown
    bust = rules.bust_policy(new_score, thrown)
    entry = ScoreHistoryEntry(
        score=thrown,
        previous_score=player.score,
        timestamp=rules.clock(),
        turn_number=player.next_turn_number,
        bust=bust,
    )

    if bust:
        return state.with_player(
            player_index,
            player.record(entry, score=player.turn_start_score),
            last_throw_was_bust=True,
        )

    is_winner = new_score == 0
    next_state = state.with_player(
        player_index,
        player.record(entry, score=new_score, is_winner=is_winner),
        last_throw_was_bust=False,
    )
    if is_winner:
        return replace(next_state, game_finished=True, winner_id=player.id)
    return next_state
