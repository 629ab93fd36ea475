"""UTC timestamp helpers.

Stored timestamps are fixed-width ISO-8601 strings with microsecond
precision, so sorting the strings sorts the instants.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_storage(moment: datetime) -> str:
    if moment.tzinfo is None:
        raise ValueError("timestamps must be timezone-aware")
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_storage(raw: str) -> datetime:
    return datetime.fromisoformat(raw).astimezone(timezone.utc)


def to_rfc3339(moment: datetime) -> str:
    """Render *moment* for API consumers, second precision."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
