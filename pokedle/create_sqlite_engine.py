import pathlib

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from pokedle.load_secrets import sqlite_path


def create_sqlite_engine(file_path: str | pathlib.Path = sqlite_path) -> AsyncEngine:
    sqlite_url = f"sqlite+aiosqlite:///{file_path}"
    return create_async_engine(url=sqlite_url, echo=False)
