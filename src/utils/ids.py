"""Identifier and timestamp helpers."""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator
from ulid import ULID


def new_id(prefix: Optional[str] = None) -> str:
    """Generate a sortable text ID (ULID), optionally prefixed."""
    value = str(ULID())
    return f"{prefix}_{value}" if prefix else value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored timestamps."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# Model field type for timestamps that may arrive without an offset.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def epoch_ms(moment: Optional[datetime] = None) -> int:
    """Milliseconds since the epoch, as used by the governance gateway."""
    moment = moment or utc_now()
    return int(moment.timestamp() * 1000)
