"""
Employee GraphQL type definitions
"""

import strawberry


@strawberry.type
class Employee:
    """Employee type for GraphQL API."""

    id: strawberry.ID
    name: str
    position: str
    department: str  # matches CompanyDepartment.name, not enforced
    salary: int
