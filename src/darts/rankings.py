"""Standings for the score boards. Tied players share a rank and the next rank is skipped (1, 1, 3)."""

from dataclasses import dataclass
from typing import Callable

from src.core.shared_types import GameMode
from src.darts.state import GameState, Player
from src.darts.turns import assert_mode


@dataclass(frozen=True)
class Ranking:
    rank: int
    player: Player


def _rank(players: list[Player], key: Callable[[Player], int]) -> list[Ranking]:
    ordered = sorted(players, key=key)
    rankings: list[Ranking] = []
    for position, player in enumerate(ordered, start=1):
        if rankings and key(rankings[-1].player) == key(player):
            rankings.append(Ranking(rankings[-1].rank, player))
        else:
            rankings.append(Ranking(position, player))
    return rankings


def countdown_rankings(state: GameState) -> list[Ranking]:
    """Lowest remaining score first. Players who have not thrown yet are left out."""
    assert_mode(state, GameMode.COUNTDOWN)
    played = [player for player in state.players if player.score_history]
    return _rank(played, key=lambda player: player.score)


def high_low_rankings(state: GameState) -> list[Ranking]:
    """Most lives first."""
    assert_mode(state, GameMode.HIGH_LOW)
    return _rank(list(state.players), key=lambda player: -(player.lives or 0))


def player_rank(state: GameState, player_id: str) -> int | None:
    """Rank of one player, None while they are not ranked."""
    state.get_player(player_id)
    rankings = (
        high_low_rankings(state) if state.is_high_low else countdown_rankings(state)
    )
    return next(
        (ranking.rank for ranking in rankings if ranking.player.id == player_id), None
    )
