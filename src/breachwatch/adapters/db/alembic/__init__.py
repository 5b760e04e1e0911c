"""Alembic migration scripts for breachwatch."""
