"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_naive_utc,
    ensure_utc,
    parse_github_datetime,
    utc_now,
)

__all__ = [
    "ensure_naive_utc",
    "ensure_utc",
    "parse_github_datetime",
    "utc_now",
]
