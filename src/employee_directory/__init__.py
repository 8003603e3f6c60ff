"""
Employee Directory backend
GraphQL API for employee and department records
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
