"""
Error taxonomy.

Engine errors are raised before a new state is built, so the state passed in by the caller remains valid.
"""


class GameError(Exception):
    """Base class for everything the darts engine and its collaborators raise."""


class InvalidScoreError(GameError):
    """Thrown value (or challenge target) is not an integer in the allowed range."""


class InvalidChallengeError(GameError):
    """Challenge direction is neither higher nor lower."""


class PlayerNotFoundError(GameError):
    """Unknown player id passed to a transition."""


class WrongModeError(GameError):
    """Mode specific operation invoked against a game in the other mode."""


class NoActiveChallengeError(GameError):
    """High-Low resolution attempted while no challenge is set."""


class WrongPlayerError(GameError):
    """Challenge set for, or resolved by, a player who is not allowed to take it."""


class GameStateError(GameError):
    """The state does not allow the requested action, or could not be rebuilt from a stored snapshot."""


class GameFinishedError(GameStateError):
    """Action attempted after the game already has a result."""


class InvalidSetupError(GameError):
    """Rejected game configuration (roster, names, starting score or lives)."""


class RepositoryError(GameError):
    """Persistence layer could not read or write a game snapshot."""
