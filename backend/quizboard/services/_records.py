import uuid
from datetime import datetime, timezone


def as_uuid(value) -> uuid.UUID | None:
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def as_aware(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
