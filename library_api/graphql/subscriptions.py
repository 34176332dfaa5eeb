"""
GraphQL Subscription Resolvers

Subscriptions are served on the /graphql websocket using the
graphql-transport-ws (or legacy graphql-ws) protocol.
"""

from collections.abc import AsyncGenerator

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.types.book import BookType
from library_api.services.pubsub import Topic


@strawberry.type
class Subscription:
    """GraphQL Subscription type."""

    @strawberry.subscription(description="Books added after subscribing")
    async def book_added(
        self,
        info: Info[GraphQLContext, None],
    ) -> AsyncGenerator[BookType, None]:
        """
        Stream every book added while the subscription is open.

        Nothing is replayed: books added before subscribing are not sent.
        """
        db = info.context.db

        async for book in info.context.bus.subscribe(Topic.BOOK_ADDED):
            yield book
            # The event's fields have been resolved; release the connection
            # until the next one arrives
            db.close()
