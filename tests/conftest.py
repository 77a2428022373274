"""Pytest configuration and shared fixtures."""
from datetime import date, datetime
from typing import Callable

import pytest
import pytest_asyncio
from uuid6 import uuid7

from pokedle.create_sqlite_engine import create_sqlite_engine
from pokedle.crud import CreateData
from pokedle.db import build_session_factory, create_tables
from pokedle.models.schema_models import DailyPokemonSchema, PokemonSchema
from pokedle.services.catalog import DailyTargetProvider, PokemonCatalog
from pokedle.services.game_service import GameService
from pokedle.session_lock_manager import SessionLockManager

GAME_DATE = date(2024, 1, 1)


@pytest.fixture
def sample_datetime() -> datetime:
    """Provide a fixed datetime for testing."""
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def make_pokemon(sample_datetime: datetime) -> Callable[..., PokemonSchema]:
    """Build a PokemonSchema, pikachu unless overridden."""

    def _make_pokemon(**overrides) -> PokemonSchema:
        data = {
            "id": 25,
            "name": "pikachu",
            "type1": "electric",
            "type2": None,
            "evolution_count": 1,
            "is_final_evolution": False,
            "color": "yellow",
            "habitat": "forest",
            "generation": 1,
            "sprite_url": "https://example.com/pikachu.png",
            "created_at": sample_datetime,
        }
        data.update(overrides)
        return PokemonSchema(**data)

    return _make_pokemon


@pytest.fixture
def pikachu(make_pokemon) -> PokemonSchema:
    return make_pokemon()


@pytest.fixture
def charmander(make_pokemon) -> PokemonSchema:
    return make_pokemon(
        id=4,
        name="charmander",
        type1="fire",
        evolution_count=0,
        color="red",
        habitat="mountain",
        sprite_url="https://example.com/charmander.png",
    )


@pytest.fixture
def charizard(make_pokemon) -> PokemonSchema:
    return make_pokemon(
        id=6,
        name="charizard",
        type1="fire",
        type2="flying",
        evolution_count=2,
        is_final_evolution=True,
        color="red",
        habitat="mountain",
        sprite_url="https://example.com/charizard.png",
    )


@pytest.fixture
def squirtle(make_pokemon) -> PokemonSchema:
    return make_pokemon(
        id=7,
        name="squirtle",
        type1="water",
        evolution_count=0,
        color="blue",
        habitat="waters-edge",
        sprite_url="https://example.com/squirtle.png",
    )


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh on-disk SQLite database per test."""
    engine = create_sqlite_engine(tmp_path / "pokedle_test.sqlite3")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def Session(engine):
    return build_session_factory(engine)


@pytest.fixture
def catalog(Session) -> PokemonCatalog:
    return PokemonCatalog(Session)


@pytest.fixture
def daily_targets(Session) -> DailyTargetProvider:
    return DailyTargetProvider(Session)


@pytest.fixture
def game_service(Session, catalog, daily_targets) -> GameService:
    return GameService(Session, catalog, daily_targets, SessionLockManager())


@pytest_asyncio.fixture
async def daily_pokemon(
    Session, sample_datetime, pikachu, charmander, charizard, squirtle
) -> DailyPokemonSchema:
    """Catalog of four Pokemon with pikachu as the target of GAME_DATE."""
    daily = DailyPokemonSchema(
        daily_pokemon_id=uuid7(),
        date=GAME_DATE,
        pokemon_id=pikachu.id,
        created_at=sample_datetime,
    )
    async with Session() as session:
        async with session.begin():
            for pokemon in (pikachu, charmander, charizard, squirtle):
                await CreateData.add_pokemon_data(pokemon, session)
        async with session.begin():
            await CreateData.add_daily_pokemon_data(daily, session)
    return daily
