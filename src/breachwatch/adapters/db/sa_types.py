"""Custom SQLAlchemy types for breachwatch."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import BigInteger, Integer
from sqlalchemy.types import DateTime, TypeDecorator

from breachwatch.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["BIGINT_PK", "UTCDateTime"]

# SQLite only autoincrements INTEGER PRIMARY KEY columns
BIGINT_PK = BigInteger().with_variant(Integer(), "sqlite")


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """Timezone-aware UTC datetime.

    Values are stored and returned as aware ``datetime`` objects in UTC.
    Naive datetimes are treated as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        # SQLite: store naive UTC so it won't be reinterpreted as local
        return (
            value.replace(tzinfo=None)
            if dialect.name == DialectName.SQLITE.value
            else value
        )

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        return value

    def process_literal_param(self, value: datetime | None, dialect: Dialect) -> Any:
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self) -> type[datetime]:
        return datetime
