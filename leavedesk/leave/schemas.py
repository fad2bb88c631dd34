"""Leave Pydantic v2 schemas — domain records, request bodies, responses.

Naming conventions:
  - *Create / *Request  → request bodies (write)
  - *Out                → response bodies (read)
  - bare names          → immutable records the core computes over

A request's outcome is a tagged variant (``Pending | Approved | Rejected``)
discriminated on ``status``, so a rejection reason can only ever exist on a
rejected request.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from leavedesk.common.constants import LeaveStatus, LeaveType
from leavedesk.common.dates import inclusive_days


# ═════════════════════════════════════════════════════════════════════
# Outcome variant
# ═════════════════════════════════════════════════════════════════════


class Pending(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[LeaveStatus.pending] = LeaveStatus.pending


class Approved(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[LeaveStatus.approved] = LeaveStatus.approved


class Rejected(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[LeaveStatus.rejected] = LeaveStatus.rejected
    reason: str = ""


RequestOutcome = Annotated[
    Union[Pending, Approved, Rejected],
    Field(discriminator="status"),
]


def outcome_for(status: LeaveStatus, reason: Optional[str] = None) -> RequestOutcome:
    """Build the outcome variant for a flat (status, reason) pair read from a store."""
    if status == LeaveStatus.approved:
        return Approved()
    if status == LeaveStatus.rejected:
        return Rejected(reason=reason or "")
    return Pending()


# ═════════════════════════════════════════════════════════════════════
# Domain records
# ═════════════════════════════════════════════════════════════════════


class LeaveRequest(BaseModel):
    """A time-off request. Its date interval is closed on both ends."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    start_date: date
    end_date: date
    type: LeaveType
    outcome: RequestOutcome = Field(default_factory=Pending)
    notes: Optional[str] = None
    is_bank_holiday_work_request: bool = False

    @property
    def status(self) -> LeaveStatus:
        return self.outcome.status

    @property
    def rejection_reason(self) -> Optional[str]:
        if isinstance(self.outcome, Rejected):
            return self.outcome.reason
        return None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.pending

    @property
    def duration_days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)


class BankHoliday(BaseModel):
    """Static reference data."""

    model_config = ConfigDict(frozen=True)

    date: date
    name: str


class NewLeaveRequest(BaseModel):
    """Fields handed to the store when creating a request; the store assigns the id."""

    user_id: str
    start_date: date
    end_date: date
    type: LeaveType
    notes: Optional[str] = None
    is_bank_holiday_work_request: bool = False


# ═════════════════════════════════════════════════════════════════════
# Request bodies
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestCreate(BaseModel):
    """Payload for submitting a leave request.

    Date ordering is checked by the lifecycle service so that an inverted
    range surfaces as an ``invalid-range`` problem rather than a schema error.
    """

    start_date: date = Field(..., description="Leave start date (inclusive)")
    end_date: date = Field(..., description="Leave end date (inclusive)")
    type: LeaveType = LeaveType.annual
    notes: Optional[str] = Field(None, max_length=1000)
    is_bank_holiday_work_request: bool = False


class LeaveRejectRequest(BaseModel):
    """Payload for rejecting a leave request. The reason may be empty."""

    reason: str = Field("", max_length=500)


class ConflictCheckRequest(BaseModel):
    start_date: date
    end_date: date


# ═════════════════════════════════════════════════════════════════════
# Responses
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestOut(BaseModel):
    """Flattened leave request for API consumers."""

    id: str
    user_id: str
    user_name: Optional[str] = None
    start_date: date
    end_date: date
    duration_days: int
    type: LeaveType
    status: LeaveStatus
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    is_bank_holiday_work_request: bool = False

    @classmethod
    def from_record(
        cls,
        req: LeaveRequest,
        *,
        user_name: Optional[str] = None,
    ) -> "LeaveRequestOut":
        return cls(
            id=req.id,
            user_id=req.user_id,
            user_name=user_name,
            start_date=req.start_date,
            end_date=req.end_date,
            duration_days=req.duration_days,
            type=req.type,
            status=req.status,
            rejection_reason=req.rejection_reason,
            notes=req.notes,
            is_bank_holiday_work_request=req.is_bank_holiday_work_request,
        )


class LeaveSubmitOut(BaseModel):
    """Created request plus advisory overlap warnings for the same range."""

    request: LeaveRequestOut
    conflicts: list[str] = Field(default_factory=list)


class ConflictCheckOut(BaseModel):
    start_date: date
    end_date: date
    conflicts: list[str] = Field(default_factory=list)


# ═════════════════════════════════════════════════════════════════════
# Team calendar
# ═════════════════════════════════════════════════════════════════════


class CalendarEntry(BaseModel):
    """One approved absence shown on a calendar day."""

    request_id: str
    user_id: str
    user_name: Optional[str] = None
    type: LeaveType


class CalendarDay(BaseModel):
    date: date
    in_month: bool
    entries: list[CalendarEntry] = Field(default_factory=list)


class CalendarMonthOut(BaseModel):
    """Monday-start weeks covering the requested month."""

    year: int
    month: int
    days: list[CalendarDay] = Field(default_factory=list)
