"""
Type definitions used across layers
"""

from enum import StrEnum


class GameMode(StrEnum):
    COUNTDOWN = "countdown"
    HIGH_LOW = "high-low"


class ChallengeDirection(StrEnum):
    HIGHER = "higher"
    LOWER = "lower"
