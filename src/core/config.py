"""
Rules context for the engine.

Every transition receives a GameRules value explicitly, there is no process wide mutable configuration.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

MIN_THROW = 0
MAX_THROW = 180

DEFAULT_STARTING_SCORE = 501
DEFAULT_STARTING_LIVES = 5
HIGH_LOW_BASELINE = 40

MIN_PLAYERS = 2
MAX_PLAYERS = 8
MAX_PLAYER_NAME_LENGTH = 20
MIN_STARTING_LIVES = 1
MAX_STARTING_LIVES = 10

# (remaining after the visit, visit total) -> is it a bust?
BustPolicy = Callable[[int, int], bool]


def standard_bust(remaining: int, thrown: int) -> bool:
    """Going below zero or leaving exactly 1 is a bust."""
    return remaining < 0 or remaining == 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameRules:
    """House rules and collaborators a transition needs besides the state itself."""

    bust_policy: BustPolicy = standard_bust
    clock: Callable[[], datetime] = field(default=utc_now)
    high_low_baseline: int = HIGH_LOW_BASELINE
    min_throw: int = MIN_THROW
    max_throw: int = MAX_THROW


DEFAULT_RULES = GameRules()
