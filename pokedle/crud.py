"""CRUD helpers.

Every helper works inside a session owned by the caller and never commits;
the service layer opens the transaction with session.begin(). ORM rows are
converted to schemas before they leave this module.
"""

import logging
from datetime import date
from typing import List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from pokedle.models.schema_models import (
    DailyPokemonSchema,
    GameGuessSchema,
    GameSessionSchema,
    PokemonSchema,
)
from pokedle.models.schemas import DailyPokemon, GameGuess, GameSession, Pokemon


class ReadData:
    @staticmethod
    async def read_pokemon(pokemon_id: int, session: AsyncSession) -> PokemonSchema | None:
        try:
            result = await session.get(Pokemon, pokemon_id)
            if result is None:
                return None
            return PokemonSchema.model_validate(result)
        except Exception as e:
            logging.error(f"Failed to read pokemon data: {e}")
            raise

    @staticmethod
    async def read_pokemon_by_name(name: str, session: AsyncSession) -> PokemonSchema | None:
        """Read a Pokemon by name, ignoring case and surrounding whitespace

        Args:
            name (str): Name typed by the player

        Returns:
            PokemonSchema | None: The matching Pokemon, None if there is no match
        """
        try:
            stmt = select(Pokemon).where(func.lower(Pokemon.name) == name.strip().lower())
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None
            return PokemonSchema.model_validate(result)
        except Exception as e:
            logging.error(f"Failed to read pokemon by name: {e}")
            raise

    @staticmethod
    async def read_all_pokemon(session: AsyncSession) -> List[PokemonSchema]:
        try:
            stmt = select(Pokemon).order_by(Pokemon.id)
            result = await session.execute(stmt)
            return [PokemonSchema.model_validate(row) for row in result.scalars().all()]
        except Exception as e:
            logging.error(f"Failed to read all pokemon: {e}")
            raise

    @staticmethod
    async def read_pokemon_ids(session: AsyncSession) -> List[int]:
        try:
            stmt = select(Pokemon.id).order_by(Pokemon.id)
            result = await session.execute(stmt)
            return list(result.scalars().all())
        except Exception as e:
            logging.error(f"Failed to read pokemon ids: {e}")
            raise

    @staticmethod
    async def read_pokemon_names(session: AsyncSession) -> set[str]:
        try:
            result = await session.execute(select(Pokemon.name))
            return set(result.scalars().all())
        except Exception as e:
            logging.error(f"Failed to read pokemon names: {e}")
            raise

    @staticmethod
    async def read_daily_pokemon_by_date(day: date, session: AsyncSession) -> DailyPokemonSchema | None:
        """Read the daily target bound to a date, with its Pokemon

        Args:
            day (date): Calendar date of the puzzle

        Returns:
            DailyPokemonSchema | None: Daily target with pokemon loaded
        """
        try:
            stmt = (
                select(DailyPokemon)
                .options(joinedload(DailyPokemon.pokemon))
                .where(DailyPokemon.date == day)
            )
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None
            return DailyPokemonSchema.model_validate(result)
        except Exception as e:
            logging.error(f"Failed to read daily pokemon by date: {e}")
            raise

    @staticmethod
    async def read_daily_pokemon(daily_pokemon_id: UUID, session: AsyncSession) -> DailyPokemonSchema | None:
        try:
            stmt = (
                select(DailyPokemon)
                .options(joinedload(DailyPokemon.pokemon))
                .where(DailyPokemon.daily_pokemon_id == daily_pokemon_id)
            )
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None
            return DailyPokemonSchema.model_validate(result)
        except Exception as e:
            logging.error(f"Failed to read daily pokemon: {e}")
            raise

    @staticmethod
    async def read_game_session(
        session_id: str, session: AsyncSession, *, for_update: bool = False
    ) -> GameSessionSchema | None:
        """Read a game session

        Args:
            session_id (str): To identify the game session
            for_update (bool): Lock the row until the surrounding transaction ends

        Returns:
            GameSessionSchema | None: The game session, None if it does not exist
        """
        try:
            stmt = select(GameSession).where(GameSession.session_id == session_id)
            if for_update:
                stmt = stmt.with_for_update()
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None
            return GameSessionSchema.model_validate(result)
        except Exception as e:
            logging.error(f"Failed to read game session data: {e}")
            raise

    @staticmethod
    async def read_guesses_with_pokemon(
        session_id: str, session: AsyncSession
    ) -> List[tuple[GameGuessSchema, PokemonSchema]]:
        """Read every guess of a session with the guessed Pokemon, ordered by guess_number

        Args:
            session_id (str): To identify the game session

        Returns:
            List[tuple[GameGuessSchema, PokemonSchema]]: Guess ledger of the session
        """
        try:
            stmt = (
                select(GameGuess)
                .options(joinedload(GameGuess.pokemon))
                .where(GameGuess.session_id == session_id)
                .order_by(GameGuess.guess_number)
                # Guesses added earlier in this session need their pokemon loaded too
                .execution_options(populate_existing=True)
            )
            result = await session.execute(stmt)
            return [
                (GameGuessSchema.model_validate(row), PokemonSchema.model_validate(row.pokemon))
                for row in result.scalars().all()
            ]
        except Exception as e:
            logging.error(f"Failed to read game guesses: {e}")
            raise


class CreateData:
    @staticmethod
    async def add_pokemon_data(pokemon: PokemonSchema, session: AsyncSession) -> None:
        new_pokemon = Pokemon(
            id=pokemon.id,
            name=pokemon.name,
            type1=pokemon.type1,
            type2=pokemon.type2,
            evolution_count=pokemon.evolution_count,
            is_final_evolution=pokemon.is_final_evolution,
            color=pokemon.color,
            habitat=pokemon.habitat,
            generation=pokemon.generation,
            sprite_url=pokemon.sprite_url,
            created_at=pokemon.created_at,
        )
        session.add(new_pokemon)

    @staticmethod
    async def add_daily_pokemon_data(daily_pokemon: DailyPokemonSchema, session: AsyncSession) -> None:
        new_daily_pokemon = DailyPokemon(
            daily_pokemon_id=daily_pokemon.daily_pokemon_id,
            date=daily_pokemon.date,
            pokemon_id=daily_pokemon.pokemon_id,
            created_at=daily_pokemon.created_at,
        )
        session.add(new_daily_pokemon)

    @staticmethod
    async def add_game_session_data(game_session: GameSessionSchema, session: AsyncSession) -> None:
        """Add a new game session row

        Args:
            game_session (GameSessionSchema): Freshly created active session
        """
        new_game_session = GameSession(
            session_id=game_session.session_id,
            daily_pokemon_id=game_session.daily_pokemon_id,
            max_guesses=game_session.max_guesses,
            current_guesses=game_session.current_guesses,
            is_completed=game_session.is_completed,
            is_won=game_session.is_won,
            created_at=game_session.created_at,
            completed_at=game_session.completed_at,
        )
        session.add(new_game_session)

    @staticmethod
    async def add_game_guess_data(guess: GameGuessSchema, session: AsyncSession) -> None:
        """Append a guess to the ledger

        Args:
            guess (GameGuessSchema): Guess with its sequence number already assigned
        """
        new_guess = GameGuess(
            guess_id=guess.guess_id,
            session_id=guess.session_id,
            guess_number=guess.guess_number,
            guessed_pokemon_id=guess.guessed_pokemon_id,
            is_correct=guess.is_correct,
            created_at=guess.created_at,
        )
        session.add(new_guess)


class UpdateData:
    @staticmethod
    async def set_session_progress_no_commit(game_session: GameSessionSchema, session: AsyncSession) -> None:
        """Write guess counters and completion flags of a session

        Args:
            game_session (GameSessionSchema): Session returned by the admission rule
        """
        try:
            result = await session.get(GameSession, game_session.session_id)
            if result is None:
                raise RuntimeError(f"Game session {game_session.session_id} vanished during update")

            result.current_guesses = game_session.current_guesses
            result.is_completed = game_session.is_completed
            result.is_won = game_session.is_won
            result.completed_at = game_session.completed_at
        except Exception as e:
            logging.error(f"Failed to update game session data: {e}")
            raise
