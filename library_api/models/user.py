"""
User Model

Represents a user of the library API.

There is no password column: the login mutation accepts one shared
demonstration password for every user (see services.security). Usernames
are not unique; login picks the earliest user with the given name.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates

from library_api.database import Base


class User(Base):
    """
    User model.

    Table: users

    Example:
        user = User(username="alice", favorite_genre="sf")
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Login name"
    )

    favorite_genre: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Genre used by clients for recommendations"
    )

    @validates("username", "favorite_genre")
    def validate_required(self, key: str, value: str) -> str:
        if not value or not value.strip():
            raise ValueError(f"{key} is required")
        return value

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
