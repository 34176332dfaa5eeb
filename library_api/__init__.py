"""
Library API Application Package

A GraphQL API for managing books, authors and users, with bearer-token
authentication and a "book added" subscription feed.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- main.py: FastAPI application factory, lifespan and exception handlers
- models/: SQLAlchemy ORM models (Book, Author, User)
- services/: Storage operations, token handling and the notification bus
- graphql/: Strawberry schema, context, types and resolvers
"""

__version__ = "0.1.0"
