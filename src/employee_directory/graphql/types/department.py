"""
Company department GraphQL type definitions
"""

import strawberry


@strawberry.type
class CompanyDepartment:
    """Company department type for GraphQL API."""

    id: strawberry.ID
    name: str
    floor: int
