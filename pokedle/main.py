import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from pokedle.db import build_session_factory, create_engine_from_settings, create_tables
from pokedle.errors import NotFound
from pokedle.load_secrets import catalog_seed_path
from pokedle.routers import game
from pokedle.services.catalog import DailyTargetProvider, PokemonCatalog
from pokedle.services.game_service import GameService
from pokedle.session_lock_manager import SessionLockManager

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app):
    """Build the database engine and services, seed the catalog and
    schedule daily targets. This function is called to start the server.
    """
    engine = create_engine_from_settings()
    await create_tables(engine)
    Session = build_session_factory(engine)

    catalog = PokemonCatalog(Session)
    daily_targets = DailyTargetProvider(Session)
    if catalog_seed_path:
        await catalog.load_seed(catalog_seed_path)
    try:
        await daily_targets.ensure_upcoming_targets()
    except NotFound as e:
        logging.warning(f"Daily Pokemon not scheduled: {e}")

    app.state.game_service = GameService(Session, catalog, daily_targets, SessionLockManager())

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        daily_targets.ensure_upcoming_targets,
        "interval",
        hours=24,
    )
    scheduler.start()
    try:
        yield
    finally:
        scheduler.shutdown()
        await engine.dispose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(game.game_router)
