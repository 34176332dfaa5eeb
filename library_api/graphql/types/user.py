"""
GraphQL User Type

Defines the User and Token types.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    """GraphQL type representing a user."""

    username: str
    favorite_genre: str
    id: strawberry.ID


@strawberry.type(name="Token")
class TokenType:
    """
    Response type for the login mutation.

    value is a bearer token for the Authorization header.
    """

    value: str
