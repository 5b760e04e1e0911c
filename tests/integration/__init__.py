"""Integration tests.

Run against real SQLite files and a Testcontainers PostgreSQL instance:
schema constraints, Alembic upgrade/downgrade, and unit-of-work
transaction boundaries. Postgres cases skip when Docker is unavailable.
"""
