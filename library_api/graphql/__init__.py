"""
GraphQL Package

This package provides the GraphQL API using Strawberry GraphQL.

Features:
- Book, Author, User and Token types
- Query resolvers for counts, listings and the current user
- Mutation resolvers for adding books, editing authors, users and login
- bookAdded subscription fed by the notification bus
- Authentication via bearer token in context

Usage:
    The GraphQL endpoint is available at /graphql (HTTP and websocket)
    with Apollo Sandbox for development.

Example Query:
    query {
        allBooks(genre: "refactoring") {
            title
            author { name bookCount }
        }
    }
"""

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter

from library_api.config import get_settings
from library_api.graphql.context import get_context
from library_api.graphql.errors import GraphQLAppError
from library_api.graphql.mutations import Mutation
from library_api.graphql.queries import Query
from library_api.graphql.subscriptions import Subscription


def should_mask_error(error: GraphQLError) -> bool:
    """
    Hide messages of exceptions the resolvers did not raise on purpose.

    Validation errors (no original error) and GraphQLAppError subclasses
    reach the client unchanged; anything else, such as a SQLAlchemyError,
    is logged by Strawberry and reported as "Unexpected error.".
    """
    original = error.original_error
    return original is not None and not isinstance(original, GraphQLAppError)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    extensions=[MaskErrors(should_mask_error=should_mask_error)],
)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema and context
    """
    settings = get_settings()

    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="apollo-sandbox" if settings.graphql_ide_enabled else None,
    )


__all__ = ["schema", "create_graphql_router"]
