"""Unit tests for the database layer in fleetdesk/core/database.

Entity validation and repository behaviour run against in-memory SQLite, so
no external database service is needed.
"""
