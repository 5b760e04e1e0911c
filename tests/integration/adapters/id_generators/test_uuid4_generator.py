"""Integration tests for adapter specific UUIDv4Generator functionality."""

import uuid

from breachwatch.adapters.id_generators import UUIDv4Generator


def test_uuid4_version_is_4():
    """UUIDv4Generator produces valid UUIDv4 identifiers."""
    gen = UUIDv4Generator()
    value = uuid.UUID(gen.new_id())
    required_version = 4
    assert value.version == required_version


def test_uuid4_is_canonical_form():
    """Tokens use the 36-character hyphenated lowercase form."""
    token = UUIDv4Generator().new_id()
    assert token == str(uuid.UUID(token))
    assert len(token) == 36  # pylint: disable=magic-value-comparison
