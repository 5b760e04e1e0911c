"""Unit tests.

No database files and no network. Hashing, configuration, clocks, error
types, notifiers and CLI helpers are checked in isolation; the SQLite
engine tests only ever open in-memory databases.
"""
