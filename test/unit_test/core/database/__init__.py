"""Unit tests for the database layer.

This package contains unit tests for vidtube/core/database, including:

- Entity constraints and defaults
- Repository queries, pagination and cascading deletes

All tests use in-memory SQLite so they run without external services.
"""
