"""Date helpers shared by the leave, dashboard and demo modules."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from leavedesk.config import settings


def today() -> date:
    """Current date in the configured site timezone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in the closed interval [start, end]."""
    return (end - start).days + 1
