"""
pytest Fixtures for Library API Tests

This file contains shared fixtures used across all test files.

For database tests, every test gets its own in-memory SQLite engine:
tables are created before the test and the engine is discarded after,
so tests never see each other's rows.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Author, Book, User
from library_api.services import catalog
from library_api.services.security import create_access_token

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine():
    """
    Create a SQLite in-memory database engine for one test.

    StaticPool keeps the single connection alive for the whole test.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency so the GraphQL context (HTTP and
    websocket) uses our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# GRAPHQL HELPERS
# =============================================================================


def graphql_query(
    client: TestClient,
    query: str,
    variables: dict | None = None,
    token: str | None = None,
) -> dict:
    """Execute a GraphQL operation and return the decoded response body."""
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    payload = {"query": query}
    if variables:
        payload["variables"] = variables

    response = client.post("/graphql", json=payload, headers=headers)
    return response.json()


def get_auth_token(user: User) -> str:
    """Generate a bearer token for a user."""
    return create_access_token(user.username, user.id)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

LIBRARY = [
    ("Clean Code", 2008, "Robert Martin", ["refactoring"]),
    ("Agile software development", 2002, "Robert Martin", ["agile", "patterns", "design"]),
    ("Refactoring, edition 2", 2018, "Martin Fowler", ["refactoring"]),
    ("Refactoring to patterns", 2008, "Joshua Kerievsky", ["refactoring", "patterns"]),
    ("Crime and punishment", 1866, "Fyodor Dostoevsky", ["classic", "crime"]),
    ("The Demon", 1872, "Fyodor Dostoevsky", ["classic", "revolution"]),
]


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    return catalog.create_user(db_session, username="alice", favorite_genre="sf")


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """Bearer token for sample_user."""
    return get_auth_token(sample_user)


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author with a known birth year."""
    author = Author(name="Robert Martin", born=1952)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book by sample_author."""
    return catalog.create_book(
        db_session,
        title="Clean Code",
        published=2008,
        author=sample_author,
        genres=["refactoring"],
    )


@pytest.fixture
def library_books(db_session: Session) -> list[Book]:
    """Create several books across four authors and overlapping genres."""
    books = []
    for title, published, author_name, genres in LIBRARY:
        author = catalog.get_or_create_author(db_session, author_name)
        books.append(
            catalog.create_book(
                db_session,
                title=title,
                published=published,
                author=author,
                genres=genres,
            )
        )
    return books
