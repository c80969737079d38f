"""Row conversion helpers shared by the SQLite stores."""

import uuid
from datetime import UTC, datetime


def generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def parse_datetime(value: str | None, default_now: bool = False) -> datetime | None:
    """Parse a stored ISO timestamp; rows written by SQLite defaults are naive UTC."""
    if not value:
        return datetime.now(UTC) if default_now else None
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return datetime.now(UTC) if default_now else None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
