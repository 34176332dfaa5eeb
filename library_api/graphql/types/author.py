"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.services import catalog


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    id, name and born come straight from the loaded Author row;
    bookCount is counted at read time.
    """

    id: strawberry.ID
    name: str
    born: int | None = None

    @strawberry.field(description="Number of books referencing this author")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_books_by_author(info.context.db, int(self.id))
