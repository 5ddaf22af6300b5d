"""Unit tests for src/services/darts_service.py"""

from pathlib import Path

import pytest

from src.core.config import GameRules
from src.core.exceptions import (
    GameStateError,
    InvalidScoreError,
    InvalidSetupError,
    WrongPlayerError,
)
from src.core.shared_types import ChallengeDirection, GameMode
from src.db.json_repository import JSONFileGameRepository
from src.services.darts_service import DartsService
from src.services.persistence import GamePersistence
from tests.helpers import TickingClock


@pytest.fixture
def persistence(tmp_path: Path) -> GamePersistence:
    return GamePersistence(JSONFileGameRepository(tmp_path))


@pytest.fixture
def service(persistence: GamePersistence) -> DartsService:
    return DartsService(persistence, GameRules(clock=TickingClock()))


# --- LIFECYCLE ---
def test_no_game_yet(service: DartsService) -> None:
    assert service.has_game is False
    with pytest.raises(GameStateError):
        service.state


def test_new_game_is_saved(service: DartsService, persistence: GamePersistence) -> None:
    state = service.new_game(["Alice", "Bob"], GameMode.COUNTDOWN, 301)
    assert service.has_game
    assert [player.score for player in state.players] == [301, 301]
    assert persistence.load() == state


def test_new_game_validates_setup(service: DartsService) -> None:
    with pytest.raises(InvalidSetupError):
        service.new_game(["Solo"])
    assert service.has_game is False


def test_resume_saved_game(service: DartsService, persistence: GamePersistence) -> None:
    state = service.new_game(["Alice", "Bob"])
    state = service.submit_score(state.players[0].id, 60)

    fresh = DartsService(persistence)
    assert fresh.resume() == state
    assert fresh.state == state
    assert fresh.can_undo is False


def test_resume_without_saved_game(service: DartsService) -> None:
    assert service.resume() is None
    assert service.has_game is False


def test_discard(service: DartsService, persistence: GamePersistence) -> None:
    service.new_game(["Alice", "Bob"])
    service.discard()
    assert service.has_game is False
    assert persistence.load() is None


# --- COUNTDOWN ---
def test_countdown_visit_passes_the_turn(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"])
    alice = state.players[0]
    state = service.submit_score(alice.id, 100)
    assert state.players[0].score == 401
    assert state.current_player_index == 1


def test_countdown_multi_throw_turn(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"])
    alice = state.players[0]
    state = service.submit_score(alice.id, 100, end_turn=False)
    state = service.submit_score(alice.id, 50, end_turn=False)
    assert state.current_player_index == 0
    state = service.next_turn()
    assert state.current_player_index == 1


def test_countdown_bust_is_reported_after_turn_passes(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"], starting_score=40)
    state = service.submit_score(state.players[0].id, 50)
    assert state.last_throw_was_bust is True
    assert state.players[0].score == 40
    assert state.current_player_index == 1


def test_countdown_win(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"], starting_score=60)
    state = service.submit_score(state.players[0].id, 60)
    assert state.game_finished
    assert state.winner.name == "Alice"
    assert state.current_player_index == 0


def test_engine_errors_leave_state_alone(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"])
    with pytest.raises(InvalidScoreError):
        service.submit_score(state.players[0].id, 200)
    assert service.state == state
    assert service.can_undo is False


# --- HIGH-LOW ---
def test_high_low_round(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"], GameMode.HIGH_LOW, lives=2)
    alice, bob = state.players

    service.set_challenge(ChallengeDirection.HIGHER, 40)
    state = service.submit_score(alice.id, 30)
    assert state.players[0].lives == 1
    assert state.current_player_index == 1

    service.set_challenge(ChallengeDirection.LOWER, 30)
    state = service.submit_score(bob.id, 10)
    assert state.players[1].lives == 2
    assert state.players[1].score_history[-1].challenger_id == alice.id

    service.set_challenge(ChallengeDirection.HIGHER, 10, player_id=bob.id)
    with pytest.raises(WrongPlayerError):
        service.submit_score(alice.id, 50)

    service.set_challenge(ChallengeDirection.HIGHER, 10)
    state = service.submit_score(alice.id, 5)
    assert state.game_finished
    assert state.winner.id == bob.id


def test_rankings(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"])
    service.submit_score(state.players[0].id, 100)
    assert [ranking.player.name for ranking in service.rankings()] == ["Alice"]


# --- UNDO / RESET ---
def test_undo_restores_previous_state(service: DartsService, persistence: GamePersistence) -> None:
    start = service.new_game(["Alice", "Bob"])
    after_first = service.submit_score(start.players[0].id, 100)
    service.submit_score(start.players[1].id, 60)

    assert service.undo() == after_first
    assert persistence.load() == after_first
    assert service.undo() == start
    assert service.can_undo is False
    with pytest.raises(GameStateError):
        service.undo()


def test_reset_keeps_roster(service: DartsService) -> None:
    state = service.new_game(["Alice", "Bob"], starting_score=301)
    service.submit_score(state.players[0].id, 100)
    reset = service.reset()
    assert [player.id for player in reset.players] == [player.id for player in state.players]
    assert all(player.score == 301 and not player.score_history for player in reset.players)
    assert service.can_undo is False


@pytest.mark.parametrize("starting_score", [0, -10])
def test_reset_rejects_invalid_starting_score(service: DartsService, starting_score: int) -> None:
    state = service.new_game(["Alice", "Bob"])
    with pytest.raises(InvalidSetupError):
        service.reset(starting_score=starting_score)
    assert service.state == state
    assert [player.score for player in service.state.players] == [501, 501]


@pytest.mark.parametrize("starting_lives", [0, -1, 11])
def test_reset_rejects_invalid_starting_lives(service: DartsService, starting_lives: int) -> None:
    state = service.new_game(["Alice", "Bob"], GameMode.HIGH_LOW)
    with pytest.raises(InvalidSetupError):
        service.reset(starting_lives=starting_lives)
    assert service.state == state
    assert all(player.lives == 5 for player in service.state.players)


def test_reset_ignores_lives_override_in_countdown(service: DartsService) -> None:
    """Lives mean nothing to a Countdown game, so an out-of-range value is not an error there."""
    service.new_game(["Alice", "Bob"])
    reset = service.reset(starting_lives=0)
    assert all(player.lives is None for player in reset.players)


def test_reset_with_valid_overrides(service: DartsService) -> None:
    service.new_game(["Alice", "Bob"], GameMode.HIGH_LOW, lives=3)
    reset = service.reset(starting_lives=7)
    assert all(player.lives == 7 for player in reset.players)
    assert reset.current_player.lives == 7
