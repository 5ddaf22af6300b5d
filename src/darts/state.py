"""
Value types describing a darts game.

All of them are frozen: the engine never edits a state in place, every transition builds a new GameState and
shares the players it did not touch with the previous one.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Self

from src.core.exceptions import GameStateError, PlayerNotFoundError
from src.core.models import (
    GameModel,
    HighLowChallengeModel,
    PlayerModel,
    ScoreHistoryEntryModel,
)
from src.core.shared_types import ChallengeDirection, GameMode


@dataclass(frozen=True)
class ScoreHistoryEntry:
    """One recorded visit. High-Low entries also carry the challenge and its outcome."""

    score: int
    previous_score: int
    timestamp: datetime
    turn_number: int
    bust: bool = False
    challenge_direction: Optional[ChallengeDirection] = None
    challenge_target: Optional[int] = None
    challenger_id: Optional[str] = None
    passed_challenge: Optional[bool] = None
    lives_before: Optional[int] = None
    lives_after: Optional[int] = None

    @classmethod
    def from_model(cls, model: ScoreHistoryEntryModel) -> Self:
        return cls(**model.model_dump())

    def to_model(self) -> ScoreHistoryEntryModel:
        return ScoreHistoryEntryModel(
            score=self.score,
            previous_score=self.previous_score,
            timestamp=self.timestamp,
            turn_number=self.turn_number,
            bust=self.bust,
            challenge_direction=self.challenge_direction,
            challenge_target=self.challenge_target,
            challenger_id=self.challenger_id,
            passed_challenge=self.passed_challenge,
            lives_before=self.lives_before,
            lives_after=self.lives_after,
        )


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    score: int
    turn_start_score: int
    lives: Optional[int] = None  # only used in High-Low
    is_winner: bool = False
    score_history: tuple[ScoreHistoryEntry, ...] = ()

    @property
    def is_eliminated(self) -> bool:
        return self.lives is not None and self.lives <= 0

    @property
    def next_turn_number(self) -> int:
        return len(self.score_history) + 1

    def record(self, entry: ScoreHistoryEntry, **changes) -> Self:
        """Append a history entry and apply the other field changes in one step."""
        return replace(self, score_history=(*self.score_history, entry), **changes)

    @classmethod
    def from_model(cls, model: PlayerModel) -> Self:
        return cls(
            id=model.id,
            name=model.name,
            score=model.score,
            turn_start_score=model.turn_start_score,
            lives=model.lives,
            is_winner=model.is_winner,
            score_history=tuple(
                ScoreHistoryEntry.from_model(entry) for entry in model.score_history
            ),
        )

    def to_model(self) -> PlayerModel:
        return PlayerModel(
            id=self.id,
            name=self.name,
            score=self.score,
            turn_start_score=self.turn_start_score,
            lives=self.lives,
            is_winner=self.is_winner,
            score_history=[entry.to_model() for entry in self.score_history],
        )


@dataclass(frozen=True)
class HighLowChallenge:
    player_id: str  # the player who must beat it
    direction: ChallengeDirection
    target_score: int
    challenger_id: Optional[str] = None  # the player who set it, if known

    def is_beaten_by(self, thrown: int) -> bool:
        """Equal scores never beat a challenge, in either direction."""
        if self.direction == ChallengeDirection.HIGHER:
            return thrown > self.target_score
        return thrown < self.target_score

    @classmethod
    def from_model(cls, model: HighLowChallengeModel) -> Self:
        return cls(
            player_id=model.player_id,
            direction=model.direction,
            target_score=model.target_score,
            challenger_id=model.challenger_id,
        )

    def to_model(self) -> HighLowChallengeModel:
        return HighLowChallengeModel(
            player_id=self.player_id,
            direction=self.direction,
            target_score=self.target_score,
            challenger_id=self.challenger_id,
        )


@dataclass(frozen=True)
class GameState:
    players: tuple[Player, ...]
    game_mode: GameMode
    starting_score: int
    starting_lives: Optional[int] = None
    current_player_index: int = 0
    game_finished: bool = False
    winner_id: Optional[str] = None
    last_throw_was_bust: bool = False
    high_low_challenge: Optional[HighLowChallenge] = None
    pending_challenge_setter: Optional[str] = None

    @property
    def is_high_low(self) -> bool:
        return self.game_mode == GameMode.HIGH_LOW

    @property
    def winner(self) -> Optional[Player]:
        """Always the roster's copy, so winner.is_winner is in sync with the players."""
        if self.winner_id is None:
            return None
        return self.get_player(self.winner_id)

    @property
    def current_player(self) -> Optional[Player]:
        if not 0 <= self.current_player_index < len(self.players):
            return None
        return self.players[self.current_player_index]

    @property
    def players_with_lives(self) -> list[Player]:
        return [player for player in self.players if not player.is_eliminated]

    def player_index(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise PlayerNotFoundError(f"No player with id {player_id!r} in this game.")

    def get_player(self, player_id: str) -> Player:
        return self.players[self.player_index(player_id)]

    def with_player(self, index: int, player: Player, **changes) -> Self:
        """Copy of the state with one player swapped out (and other state fields changed)."""
        players = (*self.players[:index], player, *self.players[index + 1 :])
        return replace(self, players=players, **changes)

    # --- CONVERSION TO/FROM THE BOUNDARY MODEL ---
    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Rebuild a state from a stored snapshot, refusing snapshots that break the state invariants."""
        players = tuple(Player.from_model(player) for player in model.players)
        player_ids = [player.id for player in players]

        if len(set(player_ids)) != len(player_ids):
            raise GameStateError("Stored game contains duplicate player ids.")
        if players and not 0 <= model.current_player_index < len(players):
            raise GameStateError(
                f"Current player index {model.current_player_index} out of range for {len(players)} players."
            )
        for referenced_id in (model.winner_id, model.pending_challenge_setter):
            if referenced_id is not None and referenced_id not in player_ids:
                raise GameStateError(f"Stored game refers to unknown player {referenced_id!r}.")
        challenge = (
            HighLowChallenge.from_model(model.high_low_challenge)
            if model.high_low_challenge
            else None
        )
        if challenge and challenge.player_id not in player_ids:
            raise GameStateError(f"Stored challenge targets unknown player {challenge.player_id!r}.")

        return cls(
            players=players,
            game_mode=model.game_mode,
            starting_score=model.starting_score,
            starting_lives=model.starting_lives,
            current_player_index=model.current_player_index,
            game_finished=model.game_finished,
            winner_id=model.winner_id,
            last_throw_was_bust=model.last_throw_was_bust,
            high_low_challenge=challenge,
            pending_challenge_setter=model.pending_challenge_setter,
        )

    def to_model(self) -> GameModel:
        return GameModel(
            players=[player.to_model() for player in self.players],
            game_mode=self.game_mode,
            starting_score=self.starting_score,
            starting_lives=self.starting_lives,
            current_player_index=self.current_player_index,
            game_finished=self.game_finished,
            winner_id=self.winner_id,
            last_throw_was_bust=self.last_throw_was_bust,
            high_low_challenge=(
                self.high_low_challenge.to_model() if self.high_low_challenge else None
            ),
            pending_challenge_setter=self.pending_challenge_setter,
        )


def serialize_state(state: GameState) -> str:
    """JSON text of the snapshot. Timestamps are written as ISO-8601 with microseconds."""
    return state.to_model().model_dump_json()


def deserialize_state(text: str | bytes) -> GameState:
    try:
        model = GameModel.model_validate_json(text)
    except ValueError as e:
        raise GameStateError(f"Cannot read stored game: {e}") from e
    return GameState.from_model(model)
