"""Table definitions for the subscriber store.

Two tables:
    - ``subscribers``: one row per primary email address.
    - ``email_addresses``: secondary addresses, each owned by one subscriber.
      Rows are removed with their owner (``ON DELETE CASCADE``).

Email length is enforced with CHECK constraints as well as ``VARCHAR(255)``
because SQLite ignores declared string lengths.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    String,
    Table,
    false,
    text,
)

from breachwatch.adapters.db.metadata import metadata
from breachwatch.adapters.db.sa_types import BIGINT_PK, UTCDateTime
from breachwatch.interfaces.subscriber_store import MAX_EMAIL_LENGTH

SHA1_HEX_LENGTH = 40
UUID_LENGTH = 36

subscribers = Table(
    "subscribers",
    metadata,
    Column("id", BIGINT_PK, Identity(always=False, start=1), primary_key=True),
    Column("primary_email", String(MAX_EMAIL_LENGTH), nullable=False, unique=True),
    Column("primary_sha1", String(SHA1_HEX_LENGTH), nullable=False, index=True),
    Column("primary_verified", Boolean(), nullable=False, server_default=false()),
    Column(
        "primary_verification_token",
        String(UUID_LENGTH),
        nullable=False,
        unique=True,
    ),
    Column(
        "all_emails_to_primary", Boolean(), nullable=False, server_default=false()
    ),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    Column(
        "breaches_last_shown",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    CheckConstraint(
        f"length(primary_email) <= {MAX_EMAIL_LENGTH}",
        name="primary_email_max_length",
    ),
    comment="Primary subscriber accounts, one per email address.",
)

email_addresses = Table(
    "email_addresses",
    metadata,
    Column("id", BIGINT_PK, Identity(always=False, start=1), primary_key=True),
    Column(
        "subscriber_id",
        BIGINT_PK,
        ForeignKey("subscribers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("email", String(MAX_EMAIL_LENGTH), nullable=False),
    Column("sha1", String(SHA1_HEX_LENGTH), nullable=False, index=True),
    Column("verified", Boolean(), nullable=False, server_default=false()),
    Column("verification_token", String(UUID_LENGTH), nullable=False, unique=True),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    CheckConstraint(f"length(email) <= {MAX_EMAIL_LENGTH}", name="email_max_length"),
    comment="Secondary email addresses awaiting or holding verification.",
)
