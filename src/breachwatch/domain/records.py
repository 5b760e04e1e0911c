"""Immutable records returned by the subscriber store.

Field names match the column names of the ``subscribers`` and
``email_addresses`` tables so adapters can build records straight from row
mappings (``Subscriber(**row)``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Subscriber:
    """Primary account record keyed by email."""

    id: int
    primary_email: str
    primary_sha1: str
    primary_verified: bool
    primary_verification_token: str
    all_emails_to_primary: bool
    created_at: datetime
    updated_at: datetime
    breaches_last_shown: datetime


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """Secondary email address owned by exactly one subscriber."""

    id: int
    subscriber_id: int
    email: str
    sha1: str
    verified: bool
    verification_token: str
    created_at: datetime
    updated_at: datetime
