from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from pokedle.load_secrets import max_guesses as default_max_guesses


class CreateGameSessionModel(BaseModel):
    session_id: str = Field(min_length=1, max_length=100)
    max_guesses: int = Field(default=default_max_guesses, gt=0)
    target_date: Optional[date] = None  # defaults to today's target


class MakeGuessModel(BaseModel):
    session_id: str = Field(min_length=1, max_length=100)
    pokemon_name: str = Field(min_length=1)


class HealthcheckModel(BaseModel):
    status: str
    timestamp: datetime


class CatalogSyncModel(BaseModel):
    synced: int
    skipped: int
