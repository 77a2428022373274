"""Game session lifecycle rules that are independent from HTTP and DB.

A session starts active and ends either won or lost. Once completed it never
changes again. Callers pass the current time in; nothing here reads the clock.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from uuid6 import uuid7

from pokedle.errors import AlreadyCompleted, GuessLimitExceeded
from pokedle.models.schema_models import GameGuessSchema, GameSessionSchema


class SessionStatus(str, Enum):
    active = "active"
    completed_won = "completed_won"
    completed_lost = "completed_lost"


def new_session(
    session_id: str,
    daily_pokemon_id: UUID,
    max_guesses: int,
    now: datetime,
) -> GameSessionSchema:
    """Build a fresh active session with no guesses."""
    if not session_id:
        raise ValueError("session_id must not be empty")
    if max_guesses < 1:
        raise ValueError("max_guesses must be a positive integer")

    return GameSessionSchema(
        session_id=session_id,
        daily_pokemon_id=daily_pokemon_id,
        max_guesses=max_guesses,
        current_guesses=0,
        is_completed=False,
        is_won=False,
        created_at=now,
        completed_at=None,
    )


def session_status(session: GameSessionSchema) -> SessionStatus:
    if not session.is_completed:
        return SessionStatus.active
    if session.is_won:
        return SessionStatus.completed_won
    return SessionStatus.completed_lost


def can_guess(session: GameSessionSchema) -> bool:
    return not session.is_completed and session.current_guesses < session.max_guesses


def ensure_guess_admissible(session: GameSessionSchema) -> None:
    """Raise if the session cannot take another guess.

    Raises:
        AlreadyCompleted: The session is won or lost
        GuessLimitExceeded: The budget is used up but the session was never
            completed. admit_guess completes the session on the last guess, so
            this only fires for rows modified outside the game service.
    """
    if session.is_completed:
        raise AlreadyCompleted(f"Game session {session.session_id} is already completed")
    if session.current_guesses >= session.max_guesses:
        raise GuessLimitExceeded(
            f"Game session {session.session_id} reached maximum guesses ({session.max_guesses})"
        )


def admit_guess(
    session: GameSessionSchema,
    guessed_pokemon_id: int,
    target_pokemon_id: int,
    now: datetime,
) -> tuple[GameSessionSchema, GameGuessSchema]:
    """Apply one guess to the session.

    Args:
        session (GameSessionSchema): Session as currently stored
        guessed_pokemon_id (int): Resolved candidate
        target_pokemon_id (int): The daily target of the session
        now (datetime): Time of admission

    Returns:
        tuple[GameSessionSchema, GameGuessSchema]: Updated session and the new
            ledger entry. The input session is left untouched.
    """
    ensure_guess_admissible(session)

    is_correct = guessed_pokemon_id == target_pokemon_id
    guess_number = session.current_guesses + 1

    guess = GameGuessSchema(
        guess_id=uuid7(),
        session_id=session.session_id,
        guess_number=guess_number,
        guessed_pokemon_id=guessed_pokemon_id,
        is_correct=is_correct,
        created_at=now,
    )

    is_completed = is_correct or guess_number >= session.max_guesses
    updated = session.model_copy(
        update={
            "current_guesses": guess_number,
            "is_won": is_correct,
            "is_completed": is_completed,
            "completed_at": now if is_completed else None,
        }
    )
    return updated, guess
