"""
Database Migration Runner

Runs Alembic migrations on application startup. On PostgreSQL an advisory
lock makes sure only one instance migrates at a time; other instances wait
for the lock and then find nothing left to do.

Usage:
    Set RUN_MIGRATIONS_ON_STARTUP=true in environment variables.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.util.exc import CommandError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from access_control.config.settings import settings
from access_control.core.logging import logger
from access_control.db.session import engine

# Advisory lock key for migrations
MIGRATION_LOCK_ID = 720431985

MAX_LOCK_ATTEMPTS = 30


def get_alembic_config() -> Config:
    """Alembic configuration for the project's alembic.ini.

    The database URL always comes from settings so the app and the
    migrations talk to the same database.
    """
    # access_control/db/migrations.py -> project root
    project_root = Path(__file__).resolve().parent.parent.parent
    alembic_ini = project_root / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(project_root / "alembic"))
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
    return config


async def acquire_migration_lock() -> bool:
    """Try to take the advisory lock without blocking."""
    async with engine.connect() as conn:
        result = await conn.execute(
            text("SELECT pg_try_advisory_lock(:lock_id)"),
            {"lock_id": MIGRATION_LOCK_ID},
        )
        row = result.fetchone()
        return bool(row[0]) if row else False


async def release_migration_lock() -> None:
    async with engine.connect() as conn:
        await conn.execute(
            text("SELECT pg_advisory_unlock(:lock_id)"),
            {"lock_id": MIGRATION_LOCK_ID},
        )
        await conn.commit()


def _run_alembic_upgrade_sync() -> None:
    # alembic/env.py calls asyncio.run(), so it needs a thread with no running loop
    command.upgrade(get_alembic_config(), "head")


async def run_alembic_upgrade() -> None:
    """Run alembic upgrade head in a worker thread."""
    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor(max_workers=1) as executor:
        await loop.run_in_executor(executor, _run_alembic_upgrade_sync)


async def run_migrations() -> None:
    """Run database migrations, under the advisory lock on PostgreSQL."""
    if not settings.RUN_MIGRATIONS_ON_STARTUP:
        logger.debug("RUN_MIGRATIONS_ON_STARTUP is disabled, skipping migrations")
        return

    if settings.is_sqlite:
        logger.info("Running database migrations")
        await run_alembic_upgrade()
        logger.info("Database migrations completed")
        return

    logger.info("Attempting to run database migrations")

    for attempt in range(1, MAX_LOCK_ATTEMPTS + 1):
        try:
            if await acquire_migration_lock():
                logger.info("Migration lock acquired, running migrations")
                try:
                    await run_alembic_upgrade()
                    logger.info("Database migrations completed")
                    return
                finally:
                    await release_migration_lock()
                    logger.debug("Migration lock released")

            logger.info(
                "Migration lock held by another instance, waiting",
                attempt=attempt,
                max_attempts=MAX_LOCK_ATTEMPTS,
            )
            await asyncio.sleep(1)

        except (SQLAlchemyError, CommandError, OSError) as e:
            logger.error("Migration failed", error=str(e))
            raise

    logger.warning(
        "Could not acquire migration lock; assuming another instance migrated"
    )
