from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class MatchVerdict(str, Enum):
    correct = "correct"
    incorrect = "incorrect"


class OrdinalVerdict(str, Enum):
    correct = "correct"
    higher = "higher"  # the target's value is above the guessed value
    lower = "lower"  # the target's value is below the guessed value


class PokemonSchema(BaseModel):
    id: int
    name: str
    type1: str
    type2: str | None
    evolution_count: int
    is_final_evolution: bool
    color: str
    habitat: str | None
    generation: int
    sprite_url: str
    created_at: datetime

    class Config:
        from_attributes = True


class DailyPokemonSchema(BaseModel):
    daily_pokemon_id: UUID
    date: date
    pokemon_id: int
    created_at: datetime
    pokemon: Optional[PokemonSchema] = None

    class Config:
        from_attributes = True


class GameSessionSchema(BaseModel):
    session_id: str
    daily_pokemon_id: UUID
    max_guesses: int
    current_guesses: int
    is_completed: bool
    is_won: bool
    created_at: datetime
    completed_at: datetime | None

    class Config:
        from_attributes = True


class GameGuessSchema(BaseModel):
    guess_id: UUID
    session_id: str
    guess_number: int
    guessed_pokemon_id: int
    is_correct: bool
    created_at: datetime

    class Config:
        from_attributes = True


class GuessFeedbackSchema(BaseModel):
    type1: MatchVerdict
    type2: MatchVerdict
    evolution_count: OrdinalVerdict
    is_final_evolution: MatchVerdict
    color: MatchVerdict
    habitat: MatchVerdict
    generation: OrdinalVerdict


class GuessResultSchema(BaseModel):
    guess: GameGuessSchema
    pokemon: PokemonSchema
    feedback: GuessFeedbackSchema


class GameStateSchema(BaseModel):
    session: GameSessionSchema
    target_pokemon: Optional[PokemonSchema] = None
    guesses: List[GuessResultSchema]
    can_guess: bool
