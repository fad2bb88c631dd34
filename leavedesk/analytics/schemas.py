"""Analytics Pydantic v2 schemas — response models for absence analytics."""

from __future__ import annotations

from pydantic import BaseModel, Field

from leavedesk.common.constants import BradfordBand, LeaveType


class MonthlyAbsence(BaseModel):
    """Approved requests starting in a calendar month (any year)."""

    month: int = Field(..., ge=1, le=12)
    label: str
    requests: int = 0


class LeaveTypeCount(BaseModel):
    type: LeaveType
    count: int


class BradfordScore(BaseModel):
    """Bradford Factor for one user, with its traffic-light band."""

    user_id: str
    name: str
    spells: int
    score: int
    band: BradfordBand


class AnalyticsSummaryOut(BaseModel):
    absence_by_month: list[MonthlyAbsence] = Field(default_factory=list)
    leave_type_distribution: list[LeaveTypeCount] = Field(default_factory=list)
    bradford_scores: list[BradfordScore] = Field(default_factory=list)
