"""Dashboard Pydantic v2 schemas — response model for the personal dashboard."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from leavedesk.leave.schemas import BankHoliday, LeaveRequestOut


class DashboardOut(BaseModel):
    """KPI cards for the acting user's dashboard."""

    remaining_allowance: Decimal = Field(..., description="Entitlement minus leave taken")
    annual_leave_entitlement: Decimal
    my_pending_requests: int = Field(0, description="Own requests awaiting a decision")
    pending_approvals: int = Field(
        0, description="Requests the user may decide; always 0 for non-approvers"
    )
    upcoming_leave: list[LeaveRequestOut] = Field(
        default_factory=list,
        description="Next approved absences, soonest first",
    )
    next_bank_holiday: Optional[BankHoliday] = None
