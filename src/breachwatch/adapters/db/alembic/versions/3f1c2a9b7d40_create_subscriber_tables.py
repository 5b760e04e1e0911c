"""Create subscribers and email_addresses tables

Revision ID: 3f1c2a9b7d40
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from breachwatch.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "subscribers",
        sa.Column(
            "id", BIGINT_PK, sa.Identity(always=False, start=1), nullable=False
        ),
        sa.Column(
            "primary_email",
            sa.String(length=255),
            nullable=False,
            comment="Primary email address, stored as given.",
        ),
        sa.Column(
            "primary_sha1",
            sa.String(length=40),
            nullable=False,
            comment="Lowercase hex SHA-1 of primary_email.",
        ),
        sa.Column(
            "primary_verified", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column(
            "primary_verification_token",
            sa.String(length=36),
            nullable=False,
            comment="UUID4 proving control of primary_email.",
        ),
        sa.Column(
            "all_emails_to_primary",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "breaches_last_shown",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "length(primary_email) <= 255",
            name=op.f("ck_subscribers_primary_email_max_length"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_subscribers")),
        sa.UniqueConstraint(
            "primary_email", name=op.f("uq_subscribers_primary_email")
        ),
        sa.UniqueConstraint(
            "primary_verification_token",
            name=op.f("uq_subscribers_primary_verification_token"),
        ),
        comment="Primary subscriber accounts, one per email address.",
    )
    op.create_index(
        op.f("ix_subscribers_primary_sha1"),
        "subscribers",
        ["primary_sha1"],
        unique=False,
    )

    op.create_table(
        "email_addresses",
        sa.Column(
            "id", BIGINT_PK, sa.Identity(always=False, start=1), nullable=False
        ),
        sa.Column("subscriber_id", BIGINT_PK, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "sha1",
            sa.String(length=40),
            nullable=False,
            comment="Lowercase hex SHA-1 of email.",
        ),
        sa.Column("verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("verification_token", sa.String(length=36), nullable=False),
        sa.Column(
            "created_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "length(email) <= 255", name=op.f("ck_email_addresses_email_max_length")
        ),
        sa.ForeignKeyConstraint(
            ["subscriber_id"],
            ["subscribers.id"],
            name=op.f("fk_email_addresses_subscriber_id_subscribers"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_email_addresses")),
        sa.UniqueConstraint(
            "verification_token", name=op.f("uq_email_addresses_verification_token")
        ),
        comment="Secondary email addresses awaiting or holding verification.",
    )
    op.create_index(
        op.f("ix_email_addresses_sha1"), "email_addresses", ["sha1"], unique=False
    )
    op.create_index(
        op.f("ix_email_addresses_subscriber_id"),
        "email_addresses",
        ["subscriber_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_email_addresses_subscriber_id"), table_name="email_addresses")
    op.drop_index(op.f("ix_email_addresses_sha1"), table_name="email_addresses")
    op.drop_table("email_addresses")

    op.drop_index(op.f("ix_subscribers_primary_sha1"), table_name="subscribers")
    op.drop_table("subscribers")
