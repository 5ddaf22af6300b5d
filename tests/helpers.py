"""Test helpers shared by several test modules."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from src.darts.state import GameState

START_TIME = datetime(2024, 5, 17, 20, 30, 0, 123456, tzinfo=timezone.utc)


class TickingClock:
    """Deterministic clock: every call is one second later than the previous one."""

    def __init__(self, start: datetime = START_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


def with_score(state: GameState, index: int, score: int) -> GameState:
    """Place a player on a given score at the start of their turn."""
    player = state.players[index]
    return state.with_player(index, replace(player, score=score, turn_start_score=score))


def with_lives(state: GameState, index: int, lives: int) -> GameState:
    player = state.players[index]
    return state.with_player(index, replace(player, lives=lives))
