"""Verification token generators for breachwatch."""

import uuid

from breachwatch.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class UUIDv4Generator(IdGenerator):
    """UUIDv4 generator.

    Tokens are random, so they reveal nothing about the address they verify
    or about when they were issued.
    """

    def new_id(self) -> str:
        """Generate a new UUID."""
        return str(uuid.uuid4())
