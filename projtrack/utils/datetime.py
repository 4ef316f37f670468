"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in UTC.

    Naive values are assumed to already be UTC, which is how they are stored
    in the database.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC but without ``tzinfo``.

    Columns are declared without timezone support so SQLite and PostgreSQL
    compare stored values the same way. Aware datetimes are used everywhere
    else and only stripped right before persisting.
    """

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def parse_github_datetime(value: object) -> datetime:
    """Parse an ISO 8601 timestamp as produced by GitHub into an aware datetime.

    Raises ``ValueError`` when the value is missing or cannot be parsed.
    """

    if isinstance(value, datetime):
        return ensure_utc(value)  # type: ignore[return-value]
    if not isinstance(value, str) or not value.strip():
        raise ValueError("timestamp is missing")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc
    return ensure_utc(parsed)  # type: ignore[return-value]
