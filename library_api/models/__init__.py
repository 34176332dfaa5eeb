"""
SQLAlchemy Models Package

Model Relationships:
- Author <-> Book: One-to-Many (a book has exactly one author,
                   an author can have many books)
- User: standalone, referenced only by bearer tokens

Import all models here to:
1. Make them available as: from library_api.models import Book, Author, User
2. Ensure Alembic discovers them for migrations
"""

from library_api.models.author import Author
from library_api.models.book import Book
from library_api.models.user import User

__all__ = [
    "Author",
    "Book",
    "User",
]
