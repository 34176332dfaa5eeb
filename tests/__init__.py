"""
Test Suite for Library API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data) and
  GraphQL request helpers
- test_graphql.py: Queries, mutations and bearer-token handling on /graphql
- test_subscriptions.py: bookAdded over the /graphql websocket
- test_pubsub.py: Notification bus
- test_catalog.py: Storage operations
- test_context.py: Viewer resolution
- test_security.py: Tokens and the demonstration password
- test_config.py: Settings validation

Running Tests:
    pytest
    pytest tests/test_graphql.py -v
"""
