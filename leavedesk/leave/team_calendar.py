"""Team calendar — approved absences laid out on a Monday-start month grid."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Mapping, Sequence

from leavedesk.common.constants import LeaveStatus
from leavedesk.directory.schemas import User
from leavedesk.leave.schemas import (
    CalendarDay,
    CalendarEntry,
    CalendarMonthOut,
    LeaveRequest,
)


def events_on_day(
    day: date,
    requests: Sequence[LeaveRequest],
    names: Mapping[str, str],
) -> list[CalendarEntry]:
    """Approved requests whose closed interval contains ``day``.

    ``names`` maps user id to display name; unknown ids get no name.
    """
    return [
        CalendarEntry(
            request_id=req.id,
            user_id=req.user_id,
            user_name=names.get(req.user_id),
            type=req.type,
        )
        for req in requests
        if req.status == LeaveStatus.approved
        and req.start_date <= day <= req.end_date
    ]


def month_calendar(
    year: int,
    month: int,
    requests: Sequence[LeaveRequest],
    users: Sequence[User],
) -> CalendarMonthOut:
    """Full weeks (Mon–Sun) covering the month, including spill-over days."""
    grid = calendar.Calendar(firstweekday=calendar.MONDAY)
    approved = [r for r in requests if r.status == LeaveStatus.approved]
    names = {u.id: u.name for u in users}

    days = [
        CalendarDay(
            date=day,
            in_month=day.month == month,
            entries=events_on_day(day, approved, names),
        )
        for day in grid.itermonthdates(year, month)
    ]
    return CalendarMonthOut(year=year, month=month, days=days)
