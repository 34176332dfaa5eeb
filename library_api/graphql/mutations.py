"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.
addBook and editAuthor require authentication; createUser and login
do not.
"""

import logging

import strawberry
from sqlalchemy.exc import SQLAlchemyError
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.errors import (
    AuthenticationError,
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
)
from library_api.graphql.queries import (
    author_to_graphql,
    book_to_graphql,
    user_to_graphql,
)
from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType
from library_api.models.user import User
from library_api.services import catalog
from library_api.services.pubsub import Topic
from library_api.services.security import check_password, create_access_token

logger = logging.getLogger(__name__)


def require_auth(info: Info[GraphQLContext, None]) -> User:
    """Helper to require authentication and return the user."""
    user = info.context.current_user
    if user is None:
        raise AuthenticationError()
    return user


@strawberry.type
class Mutation:
    """GraphQL Mutation type containing all write operations."""

    # =========================================================================
    # Book Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book, creating its author if unknown")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        """
        Add a book.

        Requires authentication. The saved book is published to
        bookAdded subscribers once it has been committed.
        """
        require_auth(info)
        db = info.context.db

        try:
            book_author = catalog.get_or_create_author(db, author)
            book = catalog.create_book(
                db,
                title=title,
                published=published,
                author=book_author,
                genres=genres,
            )
        except ValueError as e:
            db.rollback()
            raise InvalidInputError(str(e)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to add book '{title}': {e}")
            raise InvalidInputError("book could not be saved") from e

        result = book_to_graphql(book)
        info.context.bus.publish(Topic.BOOK_ADDED, result)

        return result

    # =========================================================================
    # Author Mutations
    # =========================================================================

    @strawberry.mutation(description="Set an author's year of birth")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Set the birth year of the author with this exact name.

        Requires authentication.
        """
        require_auth(info)
        db = info.context.db

        author = catalog.find_author(db, name)
        if author is None:
            raise NotFoundError("author not found", name=name)

        try:
            author = catalog.set_author_born(db, author, set_born_to)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update author '{name}': {e}")
            raise InvalidInputError("author could not be updated") from e

        return author_to_graphql(author)

    # =========================================================================
    # User Mutations
    # =========================================================================

    @strawberry.mutation(description="Create a user account")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favorite_genre: str,
    ) -> UserType | None:
        db = info.context.db

        try:
            user = catalog.create_user(
                db,
                username=username,
                favorite_genre=favorite_genre,
            )
        except ValueError as e:
            db.rollback()
            raise InvalidInputError(str(e)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create user '{username}': {e}")
            raise InvalidInputError("user could not be saved") from e

        return user_to_graphql(user)

    @strawberry.mutation(description="Log in and receive a bearer token")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate with username and the shared demonstration password.

        Unknown users and wrong passwords fail with the same error.
        """
        user = catalog.find_user_by_username(info.context.db, username)

        if user is None or not check_password(password):
            logger.warning(f"Failed login attempt for '{username}'")
            raise InvalidCredentialsError()

        return TokenType(value=create_access_token(user.username, user.id))
