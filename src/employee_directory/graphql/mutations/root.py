"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.department import CompanyDepartment
from ..types.employee import Employee
from ..types.system import DeleteResult


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Employee mutations
    @strawberry.mutation
    async def add_employee(
        self, info: strawberry.Info, name: str, position: str, department: str, salary: int
    ) -> Employee:
        """Create a new employee."""
        from ..resolvers.employee import add_employee

        return await add_employee(info, name, position, department, salary)

    @strawberry.mutation
    async def update_employee(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        name: str | None = strawberry.UNSET,
        position: str | None = strawberry.UNSET,
        department: str | None = strawberry.UNSET,
        salary: int | None = strawberry.UNSET,
    ) -> Employee:
        """Update the provided fields of an employee."""
        from ..resolvers.employee import update_employee

        return await update_employee(
            info, str(id), name=name, position=position, department=department, salary=salary
        )

    @strawberry.mutation
    async def delete_employee(self, info: strawberry.Info, id: strawberry.ID) -> DeleteResult:
        """Delete an employee."""
        from ..resolvers.employee import delete_employee

        return await delete_employee(info, str(id))

    # Department mutations
    @strawberry.mutation
    async def add_company_department(
        self, info: strawberry.Info, name: str, floor: int
    ) -> CompanyDepartment:
        """Create a new company department."""
        from ..resolvers.department import add_department

        return await add_department(info, name, floor)

    @strawberry.mutation
    async def update_company_department(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        name: str | None = strawberry.UNSET,
        floor: int | None = strawberry.UNSET,
    ) -> CompanyDepartment:
        """Update the provided fields of a company department."""
        from ..resolvers.department import update_department

        return await update_department(info, str(id), name=name, floor=floor)

    @strawberry.mutation
    async def delete_company_department(
        self, info: strawberry.Info, id: strawberry.ID
    ) -> DeleteResult:
        """Delete a company department."""
        from ..resolvers.department import delete_department

        return await delete_department(info, str(id))
