"""
Database module for the Employee Directory backend
"""

from .connection import DatabaseConnectionError, MongoPool
from .seed_data import DEPARTMENTS_COLLECTION, EMPLOYEES_COLLECTION

__all__ = [
    "DEPARTMENTS_COLLECTION",
    "EMPLOYEES_COLLECTION",
    "DatabaseConnectionError",
    "MongoPool",
]
