"""
Tests for employee resolvers
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import strawberry

from employee_directory.graphql.errors import ResolverError
from employee_directory.graphql.resolvers.employee import (
    add_employee,
    delete_employee,
    resolve_all_employees,
    resolve_employee_by_id,
    resolve_employees_by_department,
    to_employee,
    update_employee,
)


@pytest.fixture
def broken_info():
    """GraphQL info whose pool fails every collection call."""
    pool = MagicMock()
    pool.employees = AsyncMock(side_effect=ConnectionError("database unreachable"))
    info = MagicMock(spec=strawberry.Info)
    info.context = {"pool": pool}
    return info


class TestToEmployee:
    def test_uses_id_field(self):
        employee = to_employee(
            {"id": "7", "name": "Kim", "position": "QA", "department": "Eng", "salary": 1}
        )
        assert employee.id == "7"

    def test_falls_back_to_object_id(self):
        employee = to_employee(
            {"_id": "65f0c0ffee", "name": "Kim", "position": "QA", "department": "Eng", "salary": 1}
        )
        assert employee.id == "65f0c0ffee"


class TestEmployeeQueries:
    @pytest.mark.asyncio
    async def test_resolve_all_employees_returns_seeded_data(self, mock_info):
        employees = await resolve_all_employees(mock_info)

        assert len(employees) == 11
        assert {e.name for e in employees} >= {"John Doe", "Grace"}

    @pytest.mark.asyncio
    async def test_resolve_employee_by_id(self, mock_info):
        employee = await resolve_employee_by_id(mock_info, "2")

        assert employee is not None
        assert employee.name == "Jane Smith"
        assert employee.department == "Marketing"

    @pytest.mark.asyncio
    async def test_resolve_employee_by_id_not_found(self, mock_info):
        assert await resolve_employee_by_id(mock_info, "missing") is None

    @pytest.mark.asyncio
    async def test_resolve_employees_by_department(self, mock_info):
        employees = await resolve_employees_by_department(mock_info, "Engineering")

        assert {e.id for e in employees} == {"1", "5", "e1", "e4"}
        assert all(e.department == "Engineering" for e in employees)

    @pytest.mark.asyncio
    async def test_queries_return_empty_results_on_errors(self, broken_info):
        assert await resolve_all_employees(broken_info) == []
        assert await resolve_employees_by_department(broken_info, "Engineering") == []
        assert await resolve_employee_by_id(broken_info, "1") is None


class TestAddEmployee:
    @pytest.mark.asyncio
    async def test_add_employee(self, mock_info, directory_db):
        with patch(
            "employee_directory.graphql.resolvers.employee.generate_record_id",
            return_value="1700000000000",
        ):
            employee = await add_employee(mock_info, "Ann", "Eng", "Engineering", 90000)

        assert employee.id == "1700000000000"
        assert employee.salary == 90000
        stored = await directory_db["employees"].find_one({"id": "1700000000000"})
        assert stored["name"] == "Ann"

    @pytest.mark.asyncio
    async def test_add_employee_failure_raises_resolver_error(self, broken_info):
        with pytest.raises(ResolverError, match="Failed to add employee"):
            await add_employee(broken_info, "Ann", "Eng", "Engineering", 90000)


class TestUpdateEmployee:
    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, mock_info):
        employee = await update_employee(mock_info, "3", salary=58000)

        assert employee.salary == 58000
        assert employee.name == "Mike Johnson"
        assert employee.position == "Sales Representative"
        assert employee.department == "Sales"

    @pytest.mark.asyncio
    async def test_null_fields_are_not_written(self, mock_info, directory_db):
        await update_employee(mock_info, "4", name=None, position="HR Lead")

        stored = await directory_db["employees"].find_one({"id": "4"})
        assert stored["name"] == "Sarah Wilson"
        assert stored["position"] == "HR Lead"

    @pytest.mark.asyncio
    async def test_update_without_fields_returns_current_record(self, mock_info):
        employee = await update_employee(mock_info, "1")

        assert employee.name == "John Doe"

    @pytest.mark.asyncio
    async def test_update_missing_employee(self, mock_info):
        with pytest.raises(ResolverError, match="not found"):
            await update_employee(mock_info, "missing", name="Nobody")

    @pytest.mark.asyncio
    async def test_update_failure_raises_resolver_error(self, broken_info):
        with pytest.raises(ResolverError, match="Failed to update employee"):
            await update_employee(broken_info, "1", name="X")


class TestDeleteEmployee:
    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_info):
        result = await delete_employee(mock_info, "e2")

        assert result.success is True
        assert result.message == "Employee deleted successfully"
        assert await resolve_employee_by_id(mock_info, "e2") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_returns_failure(self, mock_info):
        result = await delete_employee(mock_info, "does-not-exist")

        assert result.success is False
        assert result.message == "Employee not found"

    @pytest.mark.asyncio
    async def test_delete_error_returns_failure(self, broken_info):
        result = await delete_employee(broken_info, "1")

        assert result.success is False
        assert result.message == "Failed to delete employee"
