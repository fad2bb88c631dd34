"""Leave ORM models: LeaveRequestRow, BankHolidayRow."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from leavedesk.common.constants import LeaveStatus, LeaveType
from leavedesk.database import Base, str_enum


class LeaveRequestRow(Base):
    __tablename__ = "leave_requests"
    __table_args__ = (
        sa.Index("ix_leave_requests_user_id", "user_id"),
        sa.Index("ix_leave_requests_status", "status"),
    )

    id: Mapped[str] = mapped_column(
        sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("profiles.id"), nullable=False,
    )
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    type: Mapped[LeaveType] = mapped_column(
        str_enum(LeaveType, "leave_type"), nullable=False,
    )
    status: Mapped[LeaveStatus] = mapped_column(
        str_enum(LeaveStatus, "leave_status"),
        nullable=False,
        default=LeaveStatus.pending,
    )
    notes: Mapped[Optional[str]] = mapped_column(sa.Text)
    rejection_reason: Mapped[Optional[str]] = mapped_column(sa.Text)
    is_bank_holiday_work_request: Mapped[bool] = mapped_column(
        sa.Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<LeaveRequestRow {self.id} {self.user_id} "
            f"{self.start_date}→{self.end_date} {self.status}>"
        )


class BankHolidayRow(Base):
    __tablename__ = "bank_holidays"

    holiday_date: Mapped[date] = mapped_column("date", sa.Date, primary_key=True)
    name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
