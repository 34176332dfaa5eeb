"""
Services Package

Business logic kept separate from the GraphQL layer so it can be tested
in isolation:
- catalog.py: Storage operations for books, authors and users
- pubsub.py: In-process notification bus behind GraphQL subscriptions
- security.py: Bearer token signing/verification and the login check
"""
