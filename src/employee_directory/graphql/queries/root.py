"""
Root GraphQL query definitions
"""

import strawberry

from ..types.department import CompanyDepartment
from ..types.employee import Employee
from ..types.system import CacheStats


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def get_all_employees(self, info: strawberry.Info) -> list[Employee]:
        """Get every employee."""
        from ..resolvers.employee import resolve_all_employees

        return await resolve_all_employees(info)

    @strawberry.field
    async def get_employee_details(
        self, info: strawberry.Info, id: strawberry.ID
    ) -> Employee | None:
        """Get an employee by ID."""
        from ..resolvers.employee import resolve_employee_by_id

        return await resolve_employee_by_id(info, str(id))

    @strawberry.field
    async def get_employees_by_department(
        self, info: strawberry.Info, department: str
    ) -> list[Employee]:
        """Get employees whose department matches exactly."""
        from ..resolvers.employee import resolve_employees_by_department

        return await resolve_employees_by_department(info, department)

    @strawberry.field
    async def get_departments(self, info: strawberry.Info) -> list[str]:
        """Get the names of all departments."""
        from ..resolvers.department import resolve_department_names

        return await resolve_department_names(info)

    @strawberry.field
    async def get_all_company_departments(self, info: strawberry.Info) -> list[CompanyDepartment]:
        """Get every company department."""
        from ..resolvers.department import resolve_all_departments

        return await resolve_all_departments(info)

    @strawberry.field
    async def get_company_department(
        self, info: strawberry.Info, id: strawberry.ID
    ) -> CompanyDepartment | None:
        """Get a company department by ID."""
        from ..resolvers.department import resolve_department_by_id

        return await resolve_department_by_id(info, str(id))

    @strawberry.field
    async def get_cache_stats(self, info: strawberry.Info) -> CacheStats:
        """Get response cache statistics."""
        from ..resolvers.system import resolve_cache_stats

        return await resolve_cache_stats(info)
