"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver reads through the catalog service using the context session.
"""

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import UserType
from library_api.models import Author, Book, User
from library_api.services import catalog


def author_to_graphql(author: Author) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
    )


def book_to_graphql(book: Book) -> BookType:
    """Convert SQLAlchemy Book model to GraphQL BookType."""
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author),
        genres=list(book.genres or []),
    )


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favorite_genre=user.favorite_genre,
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    None of the queries require authentication.
    """

    @strawberry.field(description="Total number of books")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_books(info.context.db)

    @strawberry.field(description="Total number of authors")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_authors(info.context.db)

    @strawberry.field(description="List books, optionally by author name and/or genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books with optional filtering.

        Args:
            author: Exact author name
            genre: Genre the book must be tagged with (case-sensitive)

        Returns:
            Matching books in insertion order
        """
        books = catalog.list_books(info.context.db, author=author, genre=genre)
        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="List all authors")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        return [author_to_graphql(a) for a in catalog.list_authors(info.context.db)]

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the current authenticated user.

        Returns None if not authenticated.
        """
        user = info.context.current_user

        if user is None:
            return None

        return user_to_graphql(user)
