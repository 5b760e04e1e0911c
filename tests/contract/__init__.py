"""Contract tests.

Each port's behavior is written once and run against every adapter, so the
in-memory subscriber store and the SQLAlchemy store (SQLite and PostgreSQL)
stay interchangeable.
"""
