"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests can create fresh instances

2. Lifespan Events
   - startup: verify the database is reachable (fail fast if it is not),
     then create the notification bus on app.state
   - shutdown: close the notification bus so open subscriptions end

3. Exception Handlers
   - Invalid bearer tokens become 401 responses with a GraphQL error body
   - Database and unexpected errors outside GraphQL execution are logged
     and hidden from clients; inside resolvers the schema's MaskErrors
     extension does the same
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from library_api.config import get_settings
from library_api.database import is_database_healthy, verify_connection
from library_api.graphql import create_graphql_router
from library_api.services.pubsub import NotificationBus
from library_api.services.security import TokenInvalidError

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    try:
        verify_connection()
    except SQLAlchemyError as e:
        logger.error(f"Error connecting to the database: {e}")
        raise

    # One bus per application run, shared by every request and subscription
    app.state.notification_bus = NotificationBus()

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    app.state.notification_bus.close()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library API

A GraphQL API for managing books, authors and users.

### Endpoints
- **/graphql**: queries, mutations and the `bookAdded` subscription
- **/health**: service and database status

### Authentication
Call the `login` mutation and send the returned token as
`Authorization: Bearer <token>`.
        """,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(TokenInvalidError)
    async def token_invalid_handler(
        request: Request,
        exc: TokenInvalidError,
    ) -> JSONResponse:
        """
        Reject requests whose bearer token fails verification.

        The body follows the GraphQL response shape so clients can read it
        like any other GraphQL error.
        """
        return JSONResponse(
            status_code=401,
            content={
                "data": None,
                "errors": [
                    {
                        "message": exc.message,
                        "extensions": {"code": "UNAUTHENTICATED"},
                    }
                ],
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """Log database errors while hiding details from users."""
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # GraphQL Endpoint
    # -------------------------------------------------------------------------
    graphql_router = create_graphql_router()
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API and its database are healthy.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint.

        Reports database reachability and active subscriptions.
        """
        db_healthy = is_database_healthy()

        return {
            "status": "healthy" if db_healthy else "degraded",
            "app": settings.app_name,
            "database": {"healthy": db_healthy},
            "graphql": {
                "endpoint": "/graphql",
                "playground_enabled": settings.graphql_ide_enabled,
            },
            "subscriptions": app.state.notification_bus.get_stats(),
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn library_api.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "library_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
