"""Catalog and daily-target services.

Both own their transaction boundaries when called on their own, and join the
caller's transaction when an AsyncSession is passed in.
"""

import json
import logging
import pathlib
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from typing import AsyncIterator, List

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from uuid6 import uuid7

from pokedle.crud import CreateData, ReadData
from pokedle.domain.catalog_rules import evolution_info, generation_number, pick_daily_index
from pokedle.errors import NotFound, UnknownCandidate
from pokedle.models.schema_models import DailyPokemonSchema, PokemonSchema

SPRITE_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{pokemon_id}.png"
)


@asynccontextmanager
async def session_scope(
    Session: async_sessionmaker[AsyncSession], session: AsyncSession | None
) -> AsyncIterator[AsyncSession]:
    """Reuse the caller's session, or open a short-lived one."""
    if session is not None:
        yield session
        return
    async with Session() as new_session:
        yield new_session


def build_pokemon_from_record(record: dict, now: datetime) -> PokemonSchema:
    """Convert one seed record into a PokemonSchema

    Args:
        record (dict): Species record with id, name, types, color, habitat,
            generation ("generation-i"), sprite_url and evolution_chain
        now (datetime): created_at of the new catalog entry

    Returns:
        PokemonSchema: The catalog entry to store
    """
    name = str(record["name"]).strip().lower()
    types = record["types"]
    if not types:
        raise ValueError(f"{name} has no type")

    chain = record.get("evolution_chain") or {"species": name, "evolves_to": []}
    evolution_count, is_final_evolution = evolution_info(chain, name)

    return PokemonSchema(
        id=int(record["id"]),
        name=name,
        type1=types[0],
        type2=types[1] if len(types) > 1 else None,
        evolution_count=evolution_count,
        is_final_evolution=is_final_evolution,
        color=record["color"],
        habitat=record.get("habitat"),
        generation=generation_number(str(record.get("generation", ""))),
        sprite_url=record.get("sprite_url") or SPRITE_URL_TEMPLATE.format(pokemon_id=record["id"]),
        created_at=now,
    )


class PokemonCatalog:
    def __init__(self, Session: async_sessionmaker[AsyncSession]):
        self.Session = Session

    async def resolve_by_name(self, name: str, session: AsyncSession | None = None) -> PokemonSchema:
        """Resolve a guess to a catalog entry, case-insensitively

        Raises:
            UnknownCandidate: No Pokemon has this name
        """
        async with session_scope(self.Session, session) as db:
            pokemon = await ReadData.read_pokemon_by_name(name, db)
        if pokemon is None:
            raise UnknownCandidate(f"Pokemon not found: {name}")
        return pokemon

    async def list_all(self) -> List[PokemonSchema]:
        async with self.Session() as session:
            return await ReadData.read_all_pokemon(session)

    async def load_seed(self, file_path: str | pathlib.Path) -> tuple[int, int]:
        """Load catalog entries from a JSON seed file

        Pokemon whose name or id is already stored are skipped. A malformed
        record, or one rejected by the database, is logged and skipped; each
        record is stored in its own transaction so the others are still kept.

        Args:
            file_path (str | pathlib.Path): JSON list of species records

        Returns:
            tuple[int, int]: Number of synced and skipped Pokemon
        """
        records = json.loads(pathlib.Path(file_path).read_text(encoding="utf-8"))
        logging.info(f"Found {len(records)} Pokemon in {file_path}")

        synced = 0
        skipped = 0
        now = datetime.now()
        async with self.Session() as session:
            async with session.begin():
                known_names = await ReadData.read_pokemon_names(session)
                known_ids = set(await ReadData.read_pokemon_ids(session))

            for record in records:
                try:
                    pokemon = build_pokemon_from_record(record, now)
                except (KeyError, TypeError, ValueError, ValidationError) as e:
                    logging.error(f"Failed to load seed record {record!r}: {e}")
                    continue

                if pokemon.name in known_names or pokemon.id in known_ids:
                    skipped += 1
                    continue

                try:
                    async with session.begin():
                        await CreateData.add_pokemon_data(pokemon, session)
                except IntegrityError as e:
                    logging.error(f"Failed to store Pokemon {pokemon.name} (id={pokemon.id}): {e}")
                    skipped += 1
                    continue

                known_names.add(pokemon.name)
                known_ids.add(pokemon.id)
                synced += 1

        logging.info(f"Successfully synced {synced} Pokemon, skipped {skipped}")
        return synced, skipped


class DailyTargetProvider:
    def __init__(self, Session: async_sessionmaker[AsyncSession]):
        self.Session = Session

    async def get_daily_pokemon(self, day: date, session: AsyncSession | None = None) -> DailyPokemonSchema:
        """Daily target record of a date, with its Pokemon loaded

        Raises:
            NotFound: No target is bound to this date
        """
        async with session_scope(self.Session, session) as db:
            daily_pokemon = await ReadData.read_daily_pokemon_by_date(day, db)
        if daily_pokemon is None:
            raise NotFound(f"No daily Pokemon found for date: {day.isoformat()}")
        return daily_pokemon

    async def get_target_for(self, day: date, session: AsyncSession | None = None) -> PokemonSchema:
        daily_pokemon = await self.get_daily_pokemon(day, session)
        return daily_pokemon.pokemon

    async def ensure_target_for(self, day: date) -> DailyPokemonSchema:
        """Return the daily target of a date, binding one first if there is none

        The Pokemon is picked deterministically from the date over the id-ordered catalog.

        Raises:
            NotFound: The catalog is empty
        """
        async with self.Session() as session:
            try:
                async with session.begin():
                    existing = await ReadData.read_daily_pokemon_by_date(day, session)
                    if existing is not None:
                        return existing

                    pokemon_ids = await ReadData.read_pokemon_ids(session)
                    if not pokemon_ids:
                        raise NotFound("Pokemon catalog is empty")

                    daily_pokemon = DailyPokemonSchema(
                        daily_pokemon_id=uuid7(),
                        date=day,
                        pokemon_id=pokemon_ids[pick_daily_index(day, len(pokemon_ids))],
                        created_at=datetime.now(),
                    )
                    await CreateData.add_daily_pokemon_data(daily_pokemon, session)
            except IntegrityError:
                # Another worker bound this date first
                logging.info(f"Daily Pokemon for {day.isoformat()} was created concurrently")

        return await self.get_daily_pokemon(day)

    async def ensure_upcoming_targets(self, days: int = 2, today: date | None = None) -> List[DailyPokemonSchema]:
        """Bind daily targets for today and the following days. Scheduled every 24 hours."""
        start = today or date.today()
        targets = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            daily_pokemon = await self.ensure_target_for(day)
            logging.info(f"Daily Pokemon for {day.isoformat()}: {daily_pokemon.pokemon_id}")
            targets.append(daily_pokemon)
        return targets
