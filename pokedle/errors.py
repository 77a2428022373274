"""Errors raised by the game core.

Each error ends the single request that raised it. Nothing is retried here;
the router maps them to HTTP responses.
"""


class GameError(Exception):
    """Base class for every error the game core raises."""


class NotFound(GameError):
    """The session, daily target or referenced record does not exist."""


class AlreadyExists(GameError):
    """A game session with the same session_id already exists."""


class AlreadyCompleted(GameError):
    """A guess was submitted to a session that is already won or lost."""


class GuessLimitExceeded(GameError):
    """current_guesses already reached max_guesses on a non-completed session.

    Admission always completes the session at max_guesses, so this only shows
    up when a row was changed outside of the game service.
    """


class UnknownCandidate(GameError):
    """The guessed name does not match any Pokemon in the catalog."""


class GuessConflict(GameError):
    """Another guess on the same session was stored first. The guess was not admitted."""
