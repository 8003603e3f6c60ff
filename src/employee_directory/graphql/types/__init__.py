from .department import CompanyDepartment
from .employee import Employee
from .system import CacheStats, DeleteResult

__all__ = ["CacheStats", "CompanyDepartment", "DeleteResult", "Employee"]
