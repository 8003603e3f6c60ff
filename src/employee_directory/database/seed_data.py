"""
Starter data and index setup for the directory collections.

The first successful connection of a pool runs ``prepare_database``, which
creates the secondary indexes and fills each collection with the starter
dataset when (and only when) that collection is empty.
"""

from __future__ import annotations

from typing import Any

from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase

from ..logging import get_logger

logger = get_logger(__name__)

EMPLOYEES_COLLECTION = "employees"
DEPARTMENTS_COLLECTION = "departments"

STARTER_EMPLOYEES: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "John Doe",
        "position": "Senior Software Engineer",
        "department": "Engineering",
        "salary": 95000,
    },
    {
        "id": "2",
        "name": "Jane Smith",
        "position": "Marketing Manager",
        "department": "Marketing",
        "salary": 75000,
    },
    {
        "id": "3",
        "name": "Mike Johnson",
        "position": "Sales Representative",
        "department": "Sales",
        "salary": 55000,
    },
    {
        "id": "4",
        "name": "Sarah Wilson",
        "position": "HR Specialist",
        "department": "HR",
        "salary": 60000,
    },
    {
        "id": "5",
        "name": "David Brown",
        "position": "DevOps Engineer",
        "department": "Engineering",
        "salary": 85000,
    },
    {
        "id": "e1",
        "name": "Alice",
        "position": "Developer",
        "department": "Engineering",
        "salary": 75000,
    },
    {
        "id": "e2",
        "name": "Bob",
        "position": "Manager",
        "department": "Marketing",
        "salary": 85000,
    },
    {
        "id": "e3",
        "name": "Charlie",
        "position": "Recruiter",
        "department": "HR",
        "salary": 60000,
    },
    {
        "id": "e4",
        "name": "Diana",
        "position": "UI Designer",
        "department": "Engineering",
        "salary": 70000,
    },
    {
        "id": "e5",
        "name": "Ethan",
        "position": "Copywriter",
        "department": "Marketing",
        "salary": 62000,
    },
    {
        "id": "e6",
        "name": "Grace",
        "position": "Financial Analyst",
        "department": "Finance",
        "salary": 68000,
    },
]

STARTER_DEPARTMENTS: list[dict[str, Any]] = [
    {"id": "1", "name": "Engineering", "floor": 3},
    {"id": "2", "name": "Marketing", "floor": 2},
    {"id": "3", "name": "Sales", "floor": 1},
    {"id": "4", "name": "HR", "floor": 2},
    {"id": "5", "name": "Finance", "floor": 1},
]

# (field, unique) pairs per collection
EMPLOYEE_INDEXES: list[tuple[str, bool]] = [
    ("id", True),
    ("department", False),
    ("name", False),
    ("position", False),
    ("salary", False),
]
DEPARTMENT_INDEXES: list[tuple[str, bool]] = [
    ("id", True),
    ("name", True),
]


async def ensure_indexes(db: AsyncDatabase) -> None:
    """Create the secondary indexes. Existing indexes are left untouched."""
    try:
        for collection_name, indexes in (
            (EMPLOYEES_COLLECTION, EMPLOYEE_INDEXES),
            (DEPARTMENTS_COLLECTION, DEPARTMENT_INDEXES),
        ):
            collection = db[collection_name]
            for field, unique in indexes:
                await collection.create_index([(field, ASCENDING)], unique=unique)
        logger.info("Database indexes ensured")
    except Exception as e:
        logger.warning("Failed to create database indexes", error=str(e))


async def seed_collection(
    db: AsyncDatabase, collection_name: str, documents: list[dict[str, Any]]
) -> bool:
    """Insert ``documents`` into an empty collection.

    Returns True when the documents were inserted, False when the collection
    already held data.
    """
    collection = db[collection_name]
    count = await collection.count_documents({})
    if count > 0:
        logger.info(
            "Collection already has data, skipping seed",
            collection=collection_name,
            count=count,
        )
        return False

    # insert_many adds _id to the documents it is given
    await collection.insert_many([dict(doc) for doc in documents])
    logger.info("Seeded collection", collection=collection_name, inserted=len(documents))
    return True


async def seed_initial_data(db: AsyncDatabase) -> None:
    """Seed both collections. Each collection is seeded independently."""
    logger.info("Starting database seeding")
    try:
        await seed_collection(db, EMPLOYEES_COLLECTION, STARTER_EMPLOYEES)
        await seed_collection(db, DEPARTMENTS_COLLECTION, STARTER_DEPARTMENTS)
    except Exception as e:
        logger.error("Error seeding data", error=str(e))
        return
    logger.info("Database seeding completed")


async def reset_collections(db: AsyncDatabase) -> None:
    """Remove every document from both collections."""
    for collection_name in (EMPLOYEES_COLLECTION, DEPARTMENTS_COLLECTION):
        result = await db[collection_name].delete_many({})
        logger.info("Cleared collection", collection=collection_name, deleted=result.deleted_count)


async def prepare_database(db: AsyncDatabase) -> None:
    """Create indexes, then seed the starter data."""
    await ensure_indexes(db)
    await seed_initial_data(db)
