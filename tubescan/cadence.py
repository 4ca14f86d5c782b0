"""Upload cadence: how often, and how regularly, a channel publishes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Union

import numpy as np
from dateutil import parser as dateparser

SECONDS_PER_DAY = 86400
NOT_AVAILABLE = "N/A"

Timestamp = Union[datetime, str]


def to_datetime(value: Timestamp) -> datetime:
    """Coerce an ISO 8601 string or datetime into an aware UTC datetime."""
    parsed = value if isinstance(value, datetime) else dateparser.parse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def upload_gaps(timestamps: Iterable[Timestamp], descending: bool = False) -> List[float]:
    """Consecutive gaps between uploads, in days."""
    dates = sorted((to_datetime(ts) for ts in timestamps), reverse=descending)
    return [
        abs((dates[i] - dates[i - 1]).total_seconds()) / SECONDS_PER_DAY
        for i in range(1, len(dates))
    ]


def estimate_cadence(timestamps: Iterable[Timestamp]) -> str:
    """
    Average time between uploads as a human string,
    e.g. "18.0 hours", "3.5 days", "2.0 weeks", "1.2 months".
    """
    gaps = upload_gaps(timestamps, descending=True)
    if not gaps:
        return NOT_AVAILABLE

    avg_days = float(np.mean(gaps))
    if avg_days < 1:
        return f"{avg_days * 24:.1f} hours"
    if avg_days < 7:
        return f"{avg_days:.1f} days"
    if avg_days < 30:
        return f"{avg_days / 7:.1f} weeks"
    return f"{avg_days / 30:.1f} months"


def cadence_consistency(timestamps: Iterable[Timestamp]) -> float:
    """Population standard deviation of upload gaps in days (lower is steadier)."""
    gaps = upload_gaps(timestamps)
    if not gaps:
        return 0.0
    return float(np.std(gaps))
