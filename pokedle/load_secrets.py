import os
import pathlib

from dotenv import load_dotenv

load_dotenv()

db_backend = os.getenv("DB_BACKEND", "postgres")
user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST")
port = os.getenv("DB_PORT")
db_name = os.getenv("DB_NAME")
sqlite_path = os.getenv(
    "SQLITE_PATH", str(pathlib.Path(__file__).parents[1] / "pokedle.sqlite3")
)
max_guesses = int(os.getenv("MAX_GUESSES", "6"))
catalog_seed_path = os.getenv(
    "CATALOG_SEED_PATH", str(pathlib.Path(__file__).parent / "data" / "pokemon_seed.json")
)

if __name__ == "__main__":
    print(db_backend, user, host, port, db_name, sqlite_path, max_guesses, catalog_seed_path)
