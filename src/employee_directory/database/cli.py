"""
Database maintenance commands.
"""

import asyncio
import sys

import click
from pymongo.errors import PyMongoError

from ..config import settings
from ..logging import configure_logging, get_logger
from .connection import DatabaseConnectionError, MongoPool
from .seed_data import (
    DEPARTMENTS_COLLECTION,
    EMPLOYEES_COLLECTION,
    STARTER_DEPARTMENTS,
    STARTER_EMPLOYEES,
    ensure_indexes,
    reset_collections,
    seed_collection,
)

logger = get_logger(__name__)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def db(log_level: str) -> None:
    """MongoDB connectivity and seeding."""
    configure_logging(debug=(log_level == "debug"))


async def _check(pool: MongoPool) -> list[str]:
    try:
        ok, error_message = await pool.test_connection()
        if not ok:
            raise click.ClickException(error_message or "Connection failed")
        database = await pool.connect()
        return sorted(await database.list_collection_names())
    finally:
        await pool.close()


async def _seed(pool: MongoPool, reset: bool) -> dict[str, bool]:
    try:
        database = await pool.connect()
        if reset:
            await reset_collections(database)
        await ensure_indexes(database)
        return {
            EMPLOYEES_COLLECTION: await seed_collection(
                database, EMPLOYEES_COLLECTION, STARTER_EMPLOYEES
            ),
            DEPARTMENTS_COLLECTION: await seed_collection(
                database, DEPARTMENTS_COLLECTION, STARTER_DEPARTMENTS
            ),
        }
    finally:
        await pool.close()


@db.command()
def check() -> None:
    """Verify the MongoDB connection and list collections."""
    pool = MongoPool.from_settings(settings, auto_prepare=False)
    logger.info("Checking MongoDB connection", database=settings.mongodb_db)
    collections = asyncio.run(_check(pool))
    click.echo(f"Connected to {settings.mongodb_db}")
    click.echo(f"Collections: {', '.join(collections) or '(none)'}")


@db.command()
@click.option("--reset", is_flag=True, default=False, help="Delete existing records first")
def seed(reset: bool) -> None:
    """Load the starter employees and departments."""
    pool = MongoPool.from_settings(settings, auto_prepare=False)
    try:
        seeded = asyncio.run(_seed(pool, reset))
    except (DatabaseConnectionError, PyMongoError) as e:
        logger.error("Database seeding failed", error=str(e))
        sys.exit(1)

    for collection, inserted in seeded.items():
        click.echo(f"{collection}: {'seeded' if inserted else 'already populated, skipped'}")
