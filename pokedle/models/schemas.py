from datetime import datetime

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship
from sqlalchemy.schema import Column
from sqlalchemy.types import Boolean, Date, DateTime, Integer, String, TEXT, Uuid
from uuid6 import uuid7


class Base(DeclarativeBase):
    pass


class Pokemon(Base):
    __tablename__ = "pokemon"
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False, unique=True, index=True)
    type1 = Column(String(50), nullable=False)
    type2 = Column(String(50), nullable=True)
    evolution_count = Column(Integer, nullable=False)
    is_final_evolution = Column(Boolean, nullable=False)
    color = Column(String(50), nullable=False)
    habitat = Column(String(50), nullable=True)
    generation = Column(Integer, nullable=False)
    sprite_url = Column(TEXT, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)


class DailyPokemon(Base):
    __tablename__ = "daily_pokemon"
    daily_pokemon_id = Column(Uuid, primary_key=True, default=uuid7)
    # One target per calendar date
    date = Column(Date, nullable=False, unique=True)
    pokemon_id = Column(Integer, ForeignKey("pokemon.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    pokemon = relationship("Pokemon")


class GameSession(Base):
    __tablename__ = "game_session"
    session_id = Column(String(100), primary_key=True)
    daily_pokemon_id = Column(
        Uuid, ForeignKey("daily_pokemon.daily_pokemon_id"), nullable=False
    )
    max_guesses = Column(Integer, nullable=False)
    current_guesses = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    is_won = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    completed_at = Column(DateTime, nullable=True)


class GameGuess(Base):
    __tablename__ = "game_guess"
    __table_args__ = (
        UniqueConstraint("session_id", "guess_number", name="uq_game_guess_session_number"),
    )
    guess_id = Column(Uuid, primary_key=True, default=uuid7)
    session_id = Column(
        String(100), ForeignKey("game_session.session_id"), nullable=False, index=True
    )
    guess_number = Column(Integer, nullable=False)
    guessed_pokemon_id = Column(Integer, ForeignKey("pokemon.id"), nullable=False)
    is_correct = Column(Boolean, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    pokemon = relationship("Pokemon")
