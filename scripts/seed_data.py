#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates sample users and books, creating authors as books cite them
4. Sets birth years for the authors we know
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Author, Book, User
from library_api.services import catalog

BOOKS = [
    ("Clean Code", 2008, "Robert Martin", ["refactoring"]),
    ("Agile software development", 2002, "Robert Martin", ["agile", "patterns", "design"]),
    ("Refactoring, edition 2", 2018, "Martin Fowler", ["refactoring"]),
    ("Refactoring to patterns", 2008, "Joshua Kerievsky", ["refactoring", "patterns"]),
    ("Practical Object-Oriented Design, An Agile Primer Using Ruby", 2012, "Sandi Metz", ["refactoring", "design"]),
    ("Crime and punishment", 1866, "Fyodor Dostoevsky", ["classic", "crime"]),
    ("The Demon", 1872, "Fyodor Dostoevsky", ["classic", "revolution"]),
]

BIRTH_YEARS = {
    "Robert Martin": 1952,
    "Martin Fowler": 1963,
    "Fyodor Dostoevsky": 1821,
}

USERS = [
    ("mluukkai", "refactoring"),
    ("root", "classic"),
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> list[Book]:
    """Create sample books; authors are created as they are cited."""
    print("Creating books...")
    books = []
    for title, published, author_name, genres in BOOKS:
        author = catalog.get_or_create_author(db, author_name)
        books.append(
            catalog.create_book(
                db,
                title=title,
                published=published,
                author=author,
                genres=genres,
            )
        )
    print(f"Created {len(books)} books.")
    return books


def set_birth_years(db: Session) -> None:
    """Fill in birth years for the authors we know."""
    for name, born in BIRTH_YEARS.items():
        author = catalog.find_author(db, name)
        if author is not None:
            catalog.set_author_born(db, author, born)


def create_users(db: Session) -> list[User]:
    """Create sample users. They log in with the shared demo password."""
    print("Creating users...")
    users = [
        catalog.create_user(db, username=username, favorite_genre=genre)
        for username, genre in USERS
    ]
    print(f"Created {len(users)} users.")
    return users


def seed_database(clear_existing: bool = True) -> None:
    """
    Seed the database with sample data.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)
        set_birth_years(db)
        users = create_users(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {catalog.count_authors(db)}")
        print(f"  - Books: {len(books)}")
        print(f"  - Users: {len(users)}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
