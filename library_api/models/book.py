"""
Book Model

The central model of the Library API.

A book references exactly one author through a foreign key. Genres are a
small ordered list of strings kept on the row itself as a JSON column; the
schema never needs genre metadata, so there is no genre table.

Books are never updated or deleted once created.
"""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - published: Publication year (required)
    - author_id: Reference to the author (required, immutable)
    - genres: Ordered list of genre names

    Example:
        book = Book(
            title="Clean Code",
            published=2008,
            author=author,
            genres=["refactoring"],
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    genres: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
        comment="Genre names in the order they were given"
    )

    # lazy="joined": every GraphQL Book exposes its author
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
        lazy="joined",
    )

    @validates("title")
    def validate_title(self, key: str, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Book title is required")
        return value

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', published={self.published})"
