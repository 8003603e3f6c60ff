"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import AddValidationRules, MaskErrors
from strawberry.fastapi import GraphQLRouter

from ..config import settings
from ..logging import get_logger
from ..performance import PerformanceExtension
from .context import get_context
from .errors import ResolverError
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


def should_mask_error(error: GraphQLError) -> bool:
    """Mask everything except messages written for clients."""
    return not isinstance(error.original_error, ResolverError)


def create_schema(production: bool | None = None) -> strawberry.Schema:
    """Build the schema. Production hides error details and introspection."""
    if production is None:
        production = settings.is_production

    extensions: list[Any] = [PerformanceExtension]
    if production:
        from graphql.validation import NoSchemaIntrospectionCustomRule

        extensions.append(AddValidationRules([NoSchemaIntrospectionCustomRule]))
        extensions.append(
            MaskErrors(should_mask_error=should_mask_error, error_message=GENERIC_ERROR_MESSAGE)
        )

    return strawberry.Schema(query=Query, mutation=Mutation, extensions=extensions)


# Create the GraphQL schema
schema = create_schema()


def validate_schema(target: strawberry.Schema | None = None) -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    target = target or schema
    try:
        graphql_schema = target._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(
    target: strawberry.Schema | None = None,
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""
    return GraphQLRouter(
        target or schema,
        path="/graphql",
        graphql_ide=None if settings.is_production else "graphiql",
        context_getter=get_context,
    )
