from datetime import datetime, timezone

from salon_backend.database import utcnow


def utc_now() -> datetime:
    return utcnow()


def to_utc_naive(value: datetime) -> datetime:
    """Normalise an instant to the naive UTC form stored in the database.

    Naive values are assumed to already be UTC.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_instant(value: datetime) -> str:
    return to_utc_naive(value).replace(microsecond=0).isoformat() + 'Z'
