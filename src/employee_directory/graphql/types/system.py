"""
Result and stats GraphQL types shared across resolvers
"""

import strawberry


@strawberry.type
class DeleteResult:
    """Outcome of a delete mutation."""

    success: bool
    message: str


@strawberry.type
class CacheStats:
    """Response cache statistics."""

    size: int
    max_size: int
    keys: list[str]
