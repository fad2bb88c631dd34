"""Team absence overlap detection.

Runs on every edit of a candidate date range, so it stays pure and linear in
the number of requests. Results are advisory warnings; nothing here blocks a
submission.
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from leavedesk.common.constants import LeaveStatus
from leavedesk.common.exceptions import InvalidRangeException
from leavedesk.directory.schemas import User
from leavedesk.leave.schemas import LeaveRequest


def validate_range(start_date: date, end_date: date) -> None:
    """Raise InvalidRangeException unless start_date <= end_date."""
    if end_date < start_date:
        raise InvalidRangeException(start_date, end_date)


def intervals_overlap(
    start_a: date,
    end_a: date,
    start_b: date,
    end_b: date,
) -> bool:
    """Closed-interval overlap: touching endpoints count."""
    return not (end_a < start_b or start_a > end_b)


def conflict_message(user: User) -> str:
    return f"{user.name} is off during this period."


def find_conflicts(
    candidate_start: date,
    candidate_end: date,
    exclude_user_id: str,
    team_members: Sequence[User],
    all_requests: Sequence[LeaveRequest],
) -> list[str]:
    """One description per approved team request overlapping the candidate range."""
    validate_range(candidate_start, candidate_end)

    members = {u.id: u for u in team_members if u.id != exclude_user_id}
    conflicts: list[str] = []
    for req in all_requests:
        if req.status != LeaveStatus.approved:
            continue
        user = members.get(req.user_id)
        if user is None:
            continue
        if intervals_overlap(candidate_start, candidate_end, req.start_date, req.end_date):
            conflicts.append(conflict_message(user))
    return conflicts
