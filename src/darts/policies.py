"""
Bust policies for Countdown.

A policy receives the score that would remain after the visit and the visit total, and returns True when the visit is a bust.
House rules differ on finishing, so the engine takes the policy from GameRules instead of hard-coding one.
The standard policy lives next to GameRules, which uses it as the default.
"""

from typing import Literal

from src.core.config import BustPolicy, standard_bust

PolicyName = Literal["standard", "double-out"]

MAX_CHECKOUT = 170

# Visit totals at or below 170 that cannot end on a double with three darts
IMPOSSIBLE_CHECKOUTS: frozenset[int] = frozenset({159, 162, 163, 165, 166, 168, 169})


def is_finishing_total(thrown: int) -> bool:
    """Can a three dart visit worth 'thrown' points end on a double?"""
    return 2 <= thrown <= MAX_CHECKOUT and thrown not in IMPOSSIBLE_CHECKOUTS


def double_out_bust(remaining: int, thrown: int) -> bool:
    """
    Double-out house rule
    ----

    * everything the standard policy busts
    * any odd remainder
    * checking out with a total that cannot be finished on a double
    """
    if standard_bust(remaining, thrown):
        return True
    if remaining % 2 == 1:
        return True
    if remaining == 0 and not is_finishing_total(thrown):
        return True
    return False


BUST_POLICIES: dict[PolicyName, BustPolicy] = {
    "standard": standard_bust,
    "double-out": double_out_bust,
}
