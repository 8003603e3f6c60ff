"""
Employee resolvers for GraphQL API
"""

from __future__ import annotations

from typing import Any

import strawberry
from pymongo import ReturnDocument

from ...logging import get_logger
from ..context import get_pool_from_info
from ..errors import ResolverError
from ..types.employee import Employee
from ..types.system import DeleteResult
from .utils import generate_record_id, provided_fields

logger = get_logger(__name__)


def to_employee(doc: dict[str, Any]) -> Employee:
    """Convert a MongoDB document to the GraphQL type."""
    return Employee(
        id=strawberry.ID(str(doc.get("id") or doc["_id"])),
        name=doc["name"],
        position=doc["position"],
        department=doc["department"],
        salary=doc["salary"],
    )


# Query resolvers
async def resolve_all_employees(info: strawberry.Info) -> list[Employee]:
    try:
        collection = await get_pool_from_info(info).employees()
        docs = await collection.find({}).to_list(length=None)
        return [to_employee(doc) for doc in docs]
    except Exception as e:
        logger.error("Error fetching employees", error=str(e))
        return []


async def resolve_employee_by_id(info: strawberry.Info, id: str) -> Employee | None:
    try:
        collection = await get_pool_from_info(info).employees()
        doc = await collection.find_one({"id": id})
    except Exception as e:
        logger.error("Error fetching employee details", employee_id=id, error=str(e))
        return None

    if doc is None:
        logger.info("Employee not found", employee_id=id)
        return None
    return to_employee(doc)


async def resolve_employees_by_department(info: strawberry.Info, department: str) -> list[Employee]:
    try:
        collection = await get_pool_from_info(info).employees()
        docs = await collection.find({"department": department}).to_list(length=None)
        return [to_employee(doc) for doc in docs]
    except Exception as e:
        logger.error("Error fetching employees by department", department=department, error=str(e))
        return []


# Mutation resolvers
async def add_employee(
    info: strawberry.Info, name: str, position: str, department: str, salary: int
) -> Employee:
    document = {
        "id": generate_record_id(),
        "name": name,
        "position": position,
        "department": department,
        "salary": salary,
    }
    try:
        collection = await get_pool_from_info(info).employees()
        await collection.insert_one(dict(document))
    except Exception as e:
        logger.error("Error adding employee", error=str(e))
        raise ResolverError("Failed to add employee") from e

    logger.info("Employee added", employee_id=document["id"], department=department)
    return to_employee(document)


async def update_employee(
    info: strawberry.Info,
    id: str,
    name: str | None = strawberry.UNSET,
    position: str | None = strawberry.UNSET,
    department: str | None = strawberry.UNSET,
    salary: int | None = strawberry.UNSET,
) -> Employee:
    fields = provided_fields(name=name, position=position, department=department, salary=salary)
    try:
        collection = await get_pool_from_info(info).employees()
        if fields:
            doc = await collection.find_one_and_update(
                {"id": id}, {"$set": fields}, return_document=ReturnDocument.AFTER
            )
        else:
            doc = await collection.find_one({"id": id})
    except Exception as e:
        logger.error("Error updating employee", employee_id=id, error=str(e))
        raise ResolverError("Failed to update employee") from e

    if doc is None:
        logger.info("Employee not found for update", employee_id=id)
        raise ResolverError("Failed to update employee: employee not found")

    logger.info("Employee updated", employee_id=id, fields=sorted(fields))
    return to_employee(doc)


async def delete_employee(info: strawberry.Info, id: str) -> DeleteResult:
    try:
        collection = await get_pool_from_info(info).employees()
        result = await collection.delete_one({"id": id})
    except Exception as e:
        logger.error("Error deleting employee", employee_id=id, error=str(e))
        return DeleteResult(success=False, message="Failed to delete employee")

    if result.deleted_count == 0:
        return DeleteResult(success=False, message="Employee not found")

    logger.info("Employee deleted", employee_id=id)
    return DeleteResult(success=True, message="Employee deleted successfully")
