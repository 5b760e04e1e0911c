"""Concrete adapters implementing breachwatch's ports."""
