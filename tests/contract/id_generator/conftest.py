"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from breachwatch.adapters.id_generators import UUIDv4Generator
from breachwatch.interfaces.id_generator import IdGenerator
from tests.fixtures.datagen import ScriptedTokenGenerator


@pytest.fixture(params=["uuid4", "scripted"])
def id_generator(
    request: pytest.FixtureRequest,
) -> Iterable[IdGenerator]:
    """Return a fresh token generator for the requested kind.

    Supported params:
      - `"uuid4"` → UUIDv4Generator (production default)
      - `"scripted"` → ScriptedTokenGenerator with two preset tokens, as the
        store tests use it

    Each invocation yields a brand-new IdGenerator instance for isolation.
    """

    match request.param:
        case "uuid4":
            yield UUIDv4Generator()
        case "scripted":
            yield ScriptedTokenGenerator(
                ["11111111-1111-4111-8111-111111111111", "22222222-2222-4222-8222-222222222222"]
            )
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")
