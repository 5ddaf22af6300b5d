"""
Boundary layer data model(s).

The persisted / transported representation of a darts game. The repositories store these models and the domain layer
converts to and from them (see GameState.from_model and GameState.to_model), so neither side depends on the other's internals.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.core.shared_types import ChallengeDirection, GameMode

PlayerId = str


class ScoreHistoryEntryModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    previous_score: int
    timestamp: datetime
    turn_number: int
    bust: bool = False
    challenge_direction: Optional[ChallengeDirection] = None
    challenge_target: Optional[int] = None
    challenger_id: Optional[PlayerId] = None
    passed_challenge: Optional[bool] = None
    lives_before: Optional[int] = None
    lives_after: Optional[int] = None


class PlayerModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PlayerId
    name: str
    score: int
    turn_start_score: int
    lives: Optional[int] = None
    is_winner: bool = False
    score_history: list[ScoreHistoryEntryModel] = []


class HighLowChallengeModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: PlayerId
    direction: ChallengeDirection
    target_score: int
    challenger_id: Optional[PlayerId] = None


class GameModel(BaseModel):
    """Transport-safe representation of a darts game used between Service, DB, and domain layers."""

    model_config = ConfigDict(frozen=True)

    players: list[PlayerModel]
    game_mode: GameMode
    starting_score: int
    starting_lives: Optional[int] = None
    current_player_index: int = 0
    game_finished: bool = False
    winner_id: Optional[PlayerId] = None
    last_throw_was_bust: bool = False
    high_low_challenge: Optional[HighLowChallengeModel] = None
    pending_challenge_setter: Optional[PlayerId] = None
