import logging
import pathlib
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from pokedle.errors import (
    AlreadyCompleted,
    AlreadyExists,
    GameError,
    GuessConflict,
    GuessLimitExceeded,
    NotFound,
    UnknownCandidate,
)
from pokedle.load_secrets import catalog_seed_path
from pokedle.models.dc_models import (
    CatalogSyncModel,
    CreateGameSessionModel,
    HealthcheckModel,
    MakeGuessModel,
)
from pokedle.models.schema_models import GameSessionSchema, GameStateSchema, PokemonSchema
from pokedle.services.game_service import GameService

game_router = APIRouter()

ERROR_STATUS_CODES = {
    NotFound: status.HTTP_404_NOT_FOUND,
    UnknownCandidate: status.HTTP_404_NOT_FOUND,
    AlreadyExists: status.HTTP_409_CONFLICT,
    AlreadyCompleted: status.HTTP_409_CONFLICT,
    GuessLimitExceeded: status.HTTP_409_CONFLICT,
    GuessConflict: status.HTTP_409_CONFLICT,
}


def get_game_service(request: Request) -> GameService:
    """GameService built by the application lifespan."""
    return request.app.state.game_service


def to_http_exception(error: GameError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), status.HTTP_400_BAD_REQUEST)
    logging.info(f"{type(error).__name__}: {error}")
    return HTTPException(status_code=status_code, detail=str(error))


class HealthAPI:
    @staticmethod
    @game_router.get("/healthcheck", response_model=HealthcheckModel)
    async def healthcheck() -> HealthcheckModel:
        return HealthcheckModel(status="ok", timestamp=datetime.now())


class PokemonAPI:
    @staticmethod
    @game_router.get("/daily-pokemon", response_model=PokemonSchema)
    async def get_daily_pokemon(
        date: date | None = None,
        game_service: GameService = Depends(get_game_service),
    ) -> PokemonSchema:
        """Return the daily target of a date (today by default)

        Args:
            date (date | None): YYYY-MM-DD
        """
        try:
            return await game_service.daily_targets.get_target_for(date or datetime.now().date())
        except GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.get("/pokemon", response_model=List[PokemonSchema])
    async def get_all_pokemon(
        game_service: GameService = Depends(get_game_service),
    ) -> List[PokemonSchema]:
        return await game_service.catalog.list_all()

    @staticmethod
    @game_router.post("/pokemon/sync", response_model=CatalogSyncModel)
    async def sync_pokemon(
        game_service: GameService = Depends(get_game_service),
    ) -> CatalogSyncModel:
        """Load the configured catalog seed file, skipping Pokemon already stored

        Returns:
            CatalogSyncModel: Number of synced and skipped Pokemon
        """
        if not catalog_seed_path or not pathlib.Path(catalog_seed_path).is_file():
            raise to_http_exception(NotFound(f"Catalog seed file not found: {catalog_seed_path}"))
        synced, skipped = await game_service.catalog.load_seed(catalog_seed_path)
        return CatalogSyncModel(synced=synced, skipped=skipped)


class GameSessionAPI:
    @staticmethod
    @game_router.post(
        "/game-session",
        response_model=GameSessionSchema,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_game_session(
        data: CreateGameSessionModel,
        game_service: GameService = Depends(get_game_service),
    ) -> GameSessionSchema:
        """Create a game session against the daily target

        Args:
            data (CreateGameSessionModel):
                    session_id: str
                    max_guesses: int
                    target_date: date | None
        """
        try:
            return await game_service.start_daily_session(
                data.session_id, data.target_date, data.max_guesses
            )
        except GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.get("/game-session/{session_id}", response_model=GameStateSchema)
    async def get_game_session(
        session_id: str,
        game_service: GameService = Depends(get_game_service),
    ) -> GameStateSchema:
        try:
            return await game_service.get_session_view(session_id)
        except GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.post("/guess", response_model=GameStateSchema)
    async def make_guess(
        data: MakeGuessModel,
        game_service: GameService = Depends(get_game_service),
    ) -> GameStateSchema:
        """Submit one guess

        Args:
            data (MakeGuessModel):
                    session_id: str
                    pokemon_name: str

        Returns:
            GameStateSchema: The refreshed game state
        """
        try:
            return await game_service.submit_guess(data.session_id, data.pokemon_name)
        except GameError as e:
            raise to_http_exception(e)
