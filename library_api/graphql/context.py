"""
GraphQL Context

Provides request context to all GraphQL resolvers:
- Database session for queries
- The viewer: Authenticated(user) or Anonymous
- The application's notification bus

The context is created fresh for each GraphQL request (or websocket
connection) and passed to all resolvers via the `info` parameter.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends
from fastapi.requests import HTTPConnection
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from library_api.database import get_db
from library_api.models import User
from library_api.services import catalog
from library_api.services.pubsub import NotificationBus
from library_api.services.security import decode_access_token, parse_bearer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authenticated:
    """The request carried a valid token for an existing user."""

    user: User


@dataclass(frozen=True)
class Anonymous:
    """The request carried no bearer token."""


Viewer = Authenticated | Anonymous


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Attributes:
        db: SQLAlchemy database session
        viewer: Authenticated(user) or Anonymous
        bus: Notification bus shared by the whole application
    """

    def __init__(self, db: Session, viewer: Viewer, bus: NotificationBus):
        super().__init__()
        self.db = db
        self.viewer = viewer
        self.bus = bus

    @property
    def current_user(self) -> User | None:
        """The authenticated user, or None for anonymous requests."""
        if isinstance(self.viewer, Authenticated):
            return self.viewer.user
        return None


def resolve_viewer(db: Session, authorization: str | None) -> Viewer:
    """
    Turn an Authorization header value into a viewer.

    Args:
        db: Database session
        authorization: Raw header value, if any

    Returns:
        Authenticated(user) for a valid token of an existing user,
        Anonymous otherwise

    Raises:
        TokenInvalidError: If a bearer token is present but fails verification
    """
    token = parse_bearer(authorization)
    if token is None:
        return Anonymous()

    payload = decode_access_token(token)
    user = catalog.get_user(db, int(payload["id"]))

    if user is None:
        logger.warning(f"Token refers to missing user id={payload['id']}")
        return Anonymous()

    return Authenticated(user=user)


async def get_context(
    connection: HTTPConnection,
    db: Session = Depends(get_db),
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Called by Strawberry for every HTTP request and for every websocket
    connection (where the handshake headers are used). A websocket
    context closes its session once the viewer is resolved; the loaded
    user stays usable detached.

    Args:
        connection: The HTTP request or websocket
        db: Request-scoped database session

    Returns:
        GraphQLContext with session, viewer and notification bus
    """
    viewer = resolve_viewer(db, connection.headers.get("Authorization"))
    bus: NotificationBus = connection.app.state.notification_bus

    if connection.scope["type"] == "websocket":
        # The socket outlives every operation on it, so the pooled
        # connection goes back now; each pushed event checks one out again
        db.close()

    return GraphQLContext(db=db, viewer=viewer, bus=bus)
