"""
GraphQL Types Package

Type definitions that map to our SQLAlchemy models. The GraphQL names
(Book, Author, User, Token) are set explicitly on each type.
"""

from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "TokenType",
    "UserType",
]
