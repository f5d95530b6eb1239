"""Time helpers shared by the table models."""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Current UTC time without tzinfo; timestamp columns are stored without time zone."""
    return datetime.now(UTC).replace(tzinfo=None)


def days_from_now(days: int) -> datetime:
    return utc_now() + timedelta(days=days)
