"""Game session use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries.
- Guess admission runs under the per-session lock and inside one transaction
  that also locks the session row, so the ledger entry and the counters are
  written together or not at all.
"""

import logging
from datetime import date, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pokedle.converter import DataConverter
from pokedle.crud import CreateData, ReadData, UpdateData
from pokedle.domain.session_rules import (
    admit_guess,
    ensure_guess_admissible,
    new_session,
    session_status,
)
from pokedle.errors import AlreadyExists, GuessConflict, NotFound
from pokedle.load_secrets import max_guesses as default_max_guesses
from pokedle.models.schema_models import GameSessionSchema, GameStateSchema
from pokedle.services.catalog import DailyTargetProvider, PokemonCatalog
from pokedle.session_lock_manager import SessionLockManager


class GameService:
    def __init__(
        self,
        Session: async_sessionmaker[AsyncSession],
        catalog: PokemonCatalog,
        daily_targets: DailyTargetProvider,
        lock_manager: SessionLockManager | None = None,
    ):
        self.Session = Session
        self.catalog = catalog
        self.daily_targets = daily_targets
        self.lock_manager = lock_manager or SessionLockManager()
        self.data_converter = DataConverter()

    async def create_session(
        self,
        session_id: str,
        daily_pokemon_id: UUID,
        max_guesses: int = default_max_guesses,
    ) -> GameSessionSchema:
        """Create an active game session against a daily target

        Args:
            session_id (str): Caller-supplied, unique session id
            daily_pokemon_id (UUID): The daily target to play
            max_guesses (int): Guess budget of the session

        Raises:
            AlreadyExists: session_id is already used
            NotFound: The daily target does not exist

        Returns:
            GameSessionSchema: The new session
        """
        game_session = new_session(session_id, daily_pokemon_id, max_guesses, datetime.now())

        try:
            async with self.Session() as session:
                async with session.begin():
                    if await ReadData.read_game_session(session_id, session) is not None:
                        raise AlreadyExists(f"Game session already exists: {session_id}")
                    if await ReadData.read_daily_pokemon(daily_pokemon_id, session) is None:
                        raise NotFound(f"Daily Pokemon not found: {daily_pokemon_id}")
                    await CreateData.add_game_session_data(game_session, session)
        except IntegrityError as e:
            # Lost a race against a concurrent create with the same id
            raise AlreadyExists(f"Game session already exists: {session_id}") from e

        logging.info(f"Created game session {session_id} (max_guesses={max_guesses})")
        return game_session

    async def start_daily_session(
        self,
        session_id: str,
        day: date | None = None,
        max_guesses: int = default_max_guesses,
    ) -> GameSessionSchema:
        """Create a session against the daily target of day (today by default)."""
        daily_pokemon = await self.daily_targets.get_daily_pokemon(day or date.today())
        return await self.create_session(session_id, daily_pokemon.daily_pokemon_id, max_guesses)

    async def submit_guess(self, session_id: str, pokemon_name: str) -> GameStateSchema:
        """Admit one guess and return the refreshed game state

        Args:
            session_id (str): To identify the game session
            pokemon_name (str): Name typed by the player, case-insensitive

        Raises:
            NotFound: No session with this id
            AlreadyCompleted: The session is already won or lost
            GuessLimitExceeded: The guess budget is used up on a non-completed session
            UnknownCandidate: The name does not match any Pokemon
            GuessConflict: The same guess number was stored by another writer

        Returns:
            GameStateSchema: Session, guesses with feedback and can_guess flag
        """
        async with self.lock_manager.hold(session_id):
            try:
                async with self.Session() as session:
                    async with session.begin():
                        game_session = await ReadData.read_game_session(
                            session_id, session, for_update=True
                        )
                        if game_session is None:
                            raise NotFound(f"Game session not found: {session_id}")
                        ensure_guess_admissible(game_session)

                        candidate = await self.catalog.resolve_by_name(pokemon_name, session)
                        daily_pokemon = await ReadData.read_daily_pokemon(
                            game_session.daily_pokemon_id, session
                        )
                        if daily_pokemon is None:
                            raise NotFound(f"Daily Pokemon not found: {game_session.daily_pokemon_id}")

                        updated_session, guess = admit_guess(
                            game_session, candidate.id, daily_pokemon.pokemon_id, datetime.now()
                        )
                        await CreateData.add_game_guess_data(guess, session)
                        await UpdateData.set_session_progress_no_commit(updated_session, session)
                        guesses = await ReadData.read_guesses_with_pokemon(session_id, session)
            except IntegrityError as e:
                # (session_id, guess_number) taken by a writer outside this process
                raise GuessConflict(
                    f"Game session {session_id} was updated concurrently, retry the guess"
                ) from e

        logging.info(
            f"Session {session_id} guess #{guess.guess_number}: {candidate.name} "
            f"(correct={guess.is_correct})"
        )
        if updated_session.is_completed:
            logging.info(f"Session {session_id} finished: {session_status(updated_session).value}")

        return self.data_converter.convert_to_game_state(
            updated_session, daily_pokemon.pokemon, guesses
        )

    async def get_session_view(self, session_id: str) -> GameStateSchema:
        """Read the game state of a session

        Raises:
            NotFound: No session with this id
        """
        async with self.Session() as session:
            game_session = await ReadData.read_game_session(session_id, session)
            if game_session is None:
                raise NotFound(f"Game session not found: {session_id}")
            daily_pokemon = await ReadData.read_daily_pokemon(game_session.daily_pokemon_id, session)
            if daily_pokemon is None:
                raise NotFound(f"Daily Pokemon not found: {game_session.daily_pokemon_id}")
            guesses = await ReadData.read_guesses_with_pokemon(session_id, session)

        return self.data_converter.convert_to_game_state(
            game_session, daily_pokemon.pokemon, guesses
        )
