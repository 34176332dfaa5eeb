"""
Catalog Service Tests

Tests for the storage operations used by the resolvers.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from library_api.models import Author, Book
from library_api.services import catalog


class TestAuthorUpsert:
    """Tests for get_or_create_author."""

    def test_creates_author_with_unknown_birth_year(self, db_session: Session):
        author = catalog.get_or_create_author(db_session, "Sandi Metz")
        db_session.commit()

        assert author.id is not None
        assert author.name == "Sandi Metz"
        assert author.born is None

    def test_returns_existing_author(self, db_session: Session, sample_author: Author):
        author = catalog.get_or_create_author(db_session, "Robert Martin")

        assert author.id == sample_author.id
        assert author.born == 1952

    def test_repeated_upserts_create_one_row(self, db_session: Session):
        first = catalog.get_or_create_author(db_session, "Sandi Metz")
        second = catalog.get_or_create_author(db_session, "Sandi Metz")
        db_session.commit()

        assert first.id == second.id
        assert catalog.count_authors(db_session) == 1

    def test_blank_name_is_rejected(self, db_session: Session):
        with pytest.raises(ValueError):
            catalog.get_or_create_author(db_session, "   ")

        assert catalog.count_authors(db_session) == 0


class TestBooks:
    """Tests for book creation, counting and listing."""

    def test_create_book(self, db_session: Session, sample_author: Author):
        book = catalog.create_book(
            db_session,
            title="Clean Code",
            published=2008,
            author=sample_author,
            genres=["refactoring"],
        )

        assert book.id is not None
        assert book.author_id == sample_author.id
        assert book.genres == ["refactoring"]

    def test_book_count_by_author_tracks_new_books(
        self, db_session: Session, sample_author: Author
    ):
        assert catalog.count_books_by_author(db_session, sample_author.id) == 0

        for year in (2008, 2011):
            catalog.create_book(
                db_session,
                title=f"Book {year}",
                published=year,
                author=sample_author,
                genres=[],
            )

        assert catalog.count_books_by_author(db_session, sample_author.id) == 2
        assert catalog.count_books(db_session) == 2

    def test_list_books_in_insertion_order(
        self, db_session: Session, library_books: list[Book]
    ):
        books = catalog.list_books(db_session)

        assert [b.id for b in books] == sorted(b.id for b in library_books)

    def test_list_books_by_author_and_genre(
        self, db_session: Session, library_books: list[Book]
    ):
        books = catalog.list_books(db_session, author="Fyodor Dostoevsky", genre="crime")

        assert [b.title for b in books] == ["Crime and punishment"]

    def test_empty_filters_list_everything(
        self, db_session: Session, library_books: list[Book]
    ):
        books = catalog.list_books(db_session, author="", genre="")

        assert len(books) == len(library_books)

    def test_list_books_unknown_author(
        self, db_session: Session, library_books: list[Book]
    ):
        assert catalog.list_books(db_session, author="Nobody", genre="classic") == []


class TestUsers:
    """Tests for user creation and lookup."""

    def test_usernames_are_not_unique(self, db_session: Session):
        first = catalog.create_user(db_session, username="alice", favorite_genre="sf")
        catalog.create_user(db_session, username="alice", favorite_genre="crime")

        found = catalog.find_user_by_username(db_session, "alice")

        assert found.id == first.id

    def test_find_missing_user(self, db_session: Session):
        assert catalog.find_user_by_username(db_session, "ghost") is None
        assert catalog.get_user(db_session, 999) is None

    def test_blank_favorite_genre_is_rejected(self, db_session: Session):
        with pytest.raises(ValueError):
            catalog.create_user(db_session, username="alice", favorite_genre="")


class TestAuthorEdit:
    """Tests for set_author_born."""

    def test_set_author_born(self, db_session: Session, sample_author: Author):
        catalog.set_author_born(db_session, sample_author, 1950)

        stored = db_session.execute(
            select(Author.born).where(Author.id == sample_author.id)
        ).scalar_one()
        assert stored == 1950
        assert db_session.execute(select(func.count()).select_from(Author)).scalar() == 1
