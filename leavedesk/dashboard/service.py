"""Dashboard service — per-user KPI aggregation over an AppState snapshot."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from leavedesk.analytics.service import remaining_allowance
from leavedesk.auth.policy import can_approve, visible_pending_approvals
from leavedesk.common.constants import UPCOMING_LEAVE_LIMIT, LeaveStatus
from leavedesk.dashboard.schemas import DashboardOut
from leavedesk.leave.schemas import BankHoliday, LeaveRequest, LeaveRequestOut
from leavedesk.state import AppState


def upcoming_leave(
    user_id: str,
    requests: Sequence[LeaveRequest],
    today: date,
    limit: int = UPCOMING_LEAVE_LIMIT,
) -> list[LeaveRequest]:
    """Approved requests of the user starting today or later, soonest first."""
    upcoming = [
        r for r in requests
        if r.user_id == user_id
        and r.status == LeaveStatus.approved
        and r.start_date >= today
    ]
    return sorted(upcoming, key=lambda r: r.start_date)[:limit]


def next_bank_holiday(
    holidays: Sequence[BankHoliday],
    today: date,
) -> Optional[BankHoliday]:
    return min(
        (h for h in holidays if h.date >= today),
        key=lambda h: h.date,
        default=None,
    )


class DashboardService:
    """Dashboard aggregation."""

    @staticmethod
    def build(
        state: AppState,
        bank_holidays: Sequence[BankHoliday],
        today: date,
    ) -> DashboardOut:
        user = state.current_user
        my_pending = sum(
            1 for r in state.requests
            if r.user_id == user.id and r.is_pending
        )
        approvals = (
            len(visible_pending_approvals(user, state.requests, state.users))
            if can_approve(user.role)
            else 0
        )
        return DashboardOut(
            remaining_allowance=remaining_allowance(user),
            annual_leave_entitlement=user.annual_leave_entitlement,
            my_pending_requests=my_pending,
            pending_approvals=approvals,
            upcoming_leave=[
                LeaveRequestOut.from_record(r, user_name=user.name)
                for r in upcoming_leave(user.id, state.requests, today)
            ],
            next_bank_holiday=next_bank_holiday(bank_holidays, today),
        )
