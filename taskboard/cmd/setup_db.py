#!/usr/bin/env python3
"""
Database setup command.
Selects the storage backend, records it in .env and initializes the schema.

Usage:
    taskboard-setup-db                     # Ask for the backend (default: sqlite)
    taskboard-setup-db --db=sqlite         # SQLite file database
    taskboard-setup-db --db=mongodb        # MongoDB
    taskboard-setup-db --db=sqlite --clean # Remove the local SQLite file first
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import dotenv_values, set_key

from taskboard.core.config import Settings
from taskboard.core.database import SQLDatabase, create_database
from taskboard.core.logger import logger

BACKENDS = {"sqlite": "sql", "mongodb": "mongo"}

DEFAULT_SQLITE_URL = "sqlite+aiosqlite:///./tasks.db"
DEFAULT_MONGODB_URL = "mongodb://localhost:27017"
DEFAULT_PORT = "4000"
DEFAULT_CORS_ORIGIN = "http://localhost:5173,http://localhost:3000"


def backend_env(db: str, current: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Variables that select ``db`` ("sqlite" or "mongodb")."""
    current = current or {}
    if db == "sqlite":
        return {
            "STORAGE_BACKEND": BACKENDS[db],
            "DATABASE_URL": current.get("DATABASE_URL") or DEFAULT_SQLITE_URL,
        }
    return {
        "STORAGE_BACKEND": BACKENDS[db],
        "MONGODB_URL": current.get("MONGODB_URL") or DEFAULT_MONGODB_URL,
    }


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse an env file the way pydantic-settings will read it back."""
    if not path.exists():
        return {}
    return {key: value or "" for key, value in dotenv_values(path).items()}


def update_env_file(
    path: Path,
    values: Dict[str, str],
    defaults: Optional[Dict[str, str]] = None,
) -> None:
    """
    Write ``values`` into an env file, keeping every unrelated line.

    ``values`` always overwrite. ``defaults`` are written only when the key
    is missing or empty. Existing keys are updated in place; new keys are
    appended.
    """
    defaults = defaults or {}
    current = read_env_file(path)
    pending = dict(values)
    for key, value in defaults.items():
        if key not in pending and not current.get(key, "").strip():
            pending[key] = value

    path.touch(exist_ok=True)
    for key, value in pending.items():
        set_key(path, key, value, quote_mode="never")

    logger.info(f"{path} updated: {', '.join(sorted(pending)) or 'no changes'}")


def remove_sqlite_file(url: str) -> bool:
    """Delete the SQLite file behind ``url``; returns True if a file was removed."""
    path = SQLDatabase(url).sqlite_path
    if path is None or not path.exists():
        logger.info("No local SQLite database to remove")
        return False
    path.unlink()
    logger.info(f"Removed local SQLite database: {path}")
    return True


async def initialize_schema(settings: Settings) -> None:
    """Connect to the configured backend and create tables or indexes."""
    database = create_database(settings)
    await database.connect()
    try:
        await database.init_schema()
    finally:
        await database.disconnect()


def prompt_backend() -> str:
    answer = input("Choose the database [sqlite/mongodb] (default: sqlite): ")
    return answer.strip().lower() or "sqlite"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Configure the storage backend and initialize its schema.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--db", help=f"Storage backend: {', '.join(sorted(BACKENDS))}")
    parser.add_argument(
        "--clean", action="store_true", help="Remove the local SQLite database file first"
    )
    parser.add_argument("--env-file", default=".env", help="Env file to update")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    db = args.db
    if db is None:
        db = prompt_backend() if sys.stdin.isatty() else "sqlite"
    if db not in BACKENDS:
        logger.error(f"Invalid choice: {db}. Valid values: {', '.join(sorted(BACKENDS))}")
        return 1

    env_path = Path(args.env_file)
    logger.info("=" * 70)
    logger.info(f"Database setup: {db}")
    logger.info("=" * 70)

    current = read_env_file(env_path)
    if args.clean:
        remove_sqlite_file(current.get("DATABASE_URL") or DEFAULT_SQLITE_URL)

    update_env_file(
        env_path,
        backend_env(db, current),
        defaults={"API_PORT": DEFAULT_PORT, "CORS_ORIGIN": DEFAULT_CORS_ORIGIN},
    )

    settings = Settings(_env_file=env_path)
    try:
        asyncio.run(initialize_schema(settings))
    except Exception as e:
        logger.error(f"Schema initialization failed: {e}")
        return 1

    logger.info(f"Database ready ({db}). Start the API with: taskboard-api")
    return 0


if __name__ == "__main__":
    sys.exit(main())
