"""
Author Model

Represents an author in the library database.

Authors are created implicitly the first time a book cites an unknown
name, so the name column carries a unique constraint: the catalog service
relies on it to upsert authors without racing concurrent requests.

The number of books an author has written is NOT stored here. It is
computed at read time by counting the books that reference the author.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.book import Book


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - books: One-to-Many, the books that reference this author

    Example:
        author = Author(name="Robert Martin", born=1952)
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Natural lookup key used by addBook and editAuthor
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name"
    )

    born: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of birth, unknown until set with editAuthor"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    @validates("name")
    def validate_name(self, key: str, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Author name is required")
        return value

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
