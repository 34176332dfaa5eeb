"""
Catalog Service

Storage operations behind the GraphQL resolvers: counting, listing and
filtering books, upserting authors, and creating users.

Functions take an open Session and leave transaction control (commit and
rollback) to the caller, except create_book/create_user/set_author_born,
which commit so that callers only ever see persisted records.

Author Upsert
=============
addBook creates an author the first time a name is cited. A read followed
by an insert would let two concurrent requests both create the same
author, so get_or_create_author() inserts with ON CONFLICT DO NOTHING
against the unique authors.name constraint and then reads the winner.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.models import Author, Book, User

logger = logging.getLogger(__name__)


# =============================================================================
# Counts
# =============================================================================


def count_books(db: Session) -> int:
    """Total number of books."""
    return db.execute(select(func.count()).select_from(Book)).scalar() or 0


def count_authors(db: Session) -> int:
    """Total number of authors."""
    return db.execute(select(func.count()).select_from(Author)).scalar() or 0


def count_books_by_author(db: Session, author_id: int) -> int:
    """Number of books whose author reference is author_id."""
    stmt = select(func.count()).select_from(Book).where(Book.author_id == author_id)
    return db.execute(stmt).scalar() or 0


# =============================================================================
# Books
# =============================================================================


def list_books(
    db: Session,
    author: str | None = None,
    genre: str | None = None,
) -> list[Book]:
    """
    List books in insertion order, optionally filtered.

    Args:
        author: Exact author name; an unknown name matches no books.
            None or "" means no author filter
        genre: Genre that must appear in the book's genres (case-sensitive).
            None or "" means no genre filter

    Returns:
        Matching books with their authors loaded
    """
    stmt = select(Book).order_by(Book.id)

    if author:
        stmt = stmt.join(Book.author).where(Author.name == author)

    books: Sequence[Book] = db.execute(stmt).scalars().all()

    # JSON containment differs per backend, so genre is matched here
    if genre:
        return [book for book in books if genre in (book.genres or [])]

    return list(books)


def create_book(
    db: Session,
    title: str,
    published: int,
    author: Author,
    genres: list[str],
) -> Book:
    """
    Persist a new book for an existing author.

    Raises:
        ValueError: If model validation fails
        SQLAlchemyError: If the insert fails
    """
    book = Book(
        title=title,
        published=published,
        author=author,
        genres=list(genres),
    )
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Created {book!r} by {author!r}")
    return book


# =============================================================================
# Authors
# =============================================================================


def list_authors(db: Session) -> list[Author]:
    """All authors in insertion order."""
    stmt = select(Author).order_by(Author.id)
    return list(db.execute(stmt).scalars().all())


def find_author(db: Session, name: str) -> Author | None:
    """Look up an author by exact name."""
    stmt = select(Author).where(Author.name == name)
    return db.execute(stmt).scalar_one_or_none()


def get_or_create_author(db: Session, name: str) -> Author:
    """
    Return the author with this name, creating it (born unknown) if needed.

    The new row is flushed but not committed; the caller commits it
    together with the book that cites it.

    Raises:
        ValueError: If the name is blank
    """
    author = find_author(db, name)
    if author is not None:
        return author

    # Validate through the model before touching the table
    Author(name=name)

    insert = _dialect_insert(db)
    if insert is not None:
        stmt = insert(Author).values(name=name, born=None).on_conflict_do_nothing(
            index_elements=["name"]
        )
        db.execute(stmt)
    else:
        try:
            with db.begin_nested():
                db.add(Author(name=name, born=None))
        except IntegrityError:
            logger.info(f"Author '{name}' was created concurrently")

    author = db.execute(select(Author).where(Author.name == name)).scalar_one()
    logger.info(f"Using new author {author!r}")
    return author


def set_author_born(db: Session, author: Author, born: int) -> Author:
    """Set an author's birth year and persist it."""
    author.born = born
    db.commit()
    db.refresh(author)
    return author


def _dialect_insert(db: Session):
    """Return the INSERT construct supporting ON CONFLICT for this backend."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    return None


# =============================================================================
# Users
# =============================================================================


def create_user(db: Session, username: str, favorite_genre: str) -> User:
    """
    Persist a new user. Usernames are not required to be unique.

    Raises:
        ValueError: If model validation fails
        SQLAlchemyError: If the insert fails
    """
    user = User(username=username, favorite_genre=favorite_genre)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Created {user!r}")
    return user


def find_user_by_username(db: Session, username: str) -> User | None:
    """The earliest user with this username, if any."""
    stmt = select(User).where(User.username == username).order_by(User.id).limit(1)
    return db.execute(stmt).scalar_one_or_none()


def get_user(db: Session, user_id: int) -> User | None:
    """Look up a user by primary key."""
    return db.get(User, user_id)
