"""
Company department resolvers for GraphQL API
"""

from __future__ import annotations

from typing import Any

import strawberry
from pymongo import ReturnDocument

from ...logging import get_logger
from ..context import get_pool_from_info
from ..errors import ResolverError
from ..types.department import CompanyDepartment
from ..types.system import DeleteResult
from .utils import generate_record_id, provided_fields

logger = get_logger(__name__)


def to_department(doc: dict[str, Any]) -> CompanyDepartment:
    """Convert a MongoDB document to the GraphQL type."""
    return CompanyDepartment(
        id=strawberry.ID(str(doc.get("id") or doc["_id"])),
        name=doc["name"],
        floor=doc["floor"],
    )


# Query resolvers
async def resolve_department_names(info: strawberry.Info) -> list[str]:
    """Names of all departments, for filter dropdowns."""
    try:
        collection = await get_pool_from_info(info).departments()
        docs = await collection.find({}).to_list(length=None)
        return [doc["name"] for doc in docs]
    except Exception as e:
        logger.error("Error fetching departments", error=str(e))
        return []


async def resolve_all_departments(info: strawberry.Info) -> list[CompanyDepartment]:
    try:
        collection = await get_pool_from_info(info).departments()
        docs = await collection.find({}).to_list(length=None)
        return [to_department(doc) for doc in docs]
    except Exception as e:
        logger.error("Error fetching company departments", error=str(e))
        return []


async def resolve_department_by_id(info: strawberry.Info, id: str) -> CompanyDepartment | None:
    try:
        collection = await get_pool_from_info(info).departments()
        doc = await collection.find_one({"id": id})
    except Exception as e:
        logger.error("Error fetching company department", department_id=id, error=str(e))
        return None

    if doc is None:
        logger.info("Company department not found", department_id=id)
        return None
    return to_department(doc)


# Mutation resolvers
async def add_department(info: strawberry.Info, name: str, floor: int) -> CompanyDepartment:
    document = {"id": generate_record_id(), "name": name, "floor": floor}
    try:
        collection = await get_pool_from_info(info).departments()
        await collection.insert_one(dict(document))
    except Exception as e:
        # Includes duplicate names rejected by the unique index
        logger.error("Error adding company department", name=name, error=str(e))
        raise ResolverError("Failed to add company department") from e

    logger.info("Company department added", department_id=document["id"], name=name)
    return to_department(document)


async def update_department(
    info: strawberry.Info,
    id: str,
    name: str | None = strawberry.UNSET,
    floor: int | None = strawberry.UNSET,
) -> CompanyDepartment:
    fields = provided_fields(name=name, floor=floor)
    try:
        collection = await get_pool_from_info(info).departments()
        if fields:
            doc = await collection.find_one_and_update(
                {"id": id}, {"$set": fields}, return_document=ReturnDocument.AFTER
            )
        else:
            doc = await collection.find_one({"id": id})
    except Exception as e:
        logger.error("Error updating company department", department_id=id, error=str(e))
        raise ResolverError("Failed to update company department") from e

    if doc is None:
        logger.info("Company department not found for update", department_id=id)
        raise ResolverError("Failed to update company department: department not found")

    logger.info("Company department updated", department_id=id, fields=sorted(fields))
    return to_department(doc)


async def delete_department(info: strawberry.Info, id: str) -> DeleteResult:
    try:
        collection = await get_pool_from_info(info).departments()
        result = await collection.delete_one({"id": id})
    except Exception as e:
        logger.error("Error deleting company department", department_id=id, error=str(e))
        return DeleteResult(success=False, message="Failed to delete company department")

    if result.deleted_count == 0:
        return DeleteResult(success=False, message="Company department not found")

    logger.info("Company department deleted", department_id=id)
    return DeleteResult(success=True, message="Company department deleted successfully")
