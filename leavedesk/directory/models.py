"""Directory ORM models: ProfileRow, TeamRow.

Column names follow the hosted store's snake_case tables (``profiles``,
``teams``); translation to the in-memory records happens in
``leavedesk.store.sql``.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from leavedesk.common.constants import UserRole
from leavedesk.database import Base, str_enum


class TeamRow(Base):
    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(
        sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    manager_id: Mapped[Optional[str]] = mapped_column(sa.String(36))
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )

    def __repr__(self) -> str:
        return f"<TeamRow {self.name!r}>"


class ProfileRow(Base):
    """One row per user; loaded wholesale at session start."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    full_name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        str_enum(UserRole, "user_role"), nullable=False, default=UserRole.employee,
    )
    team_id: Mapped[Optional[str]] = mapped_column(
        sa.String(36), sa.ForeignKey("teams.id"),
    )
    site_id: Mapped[Optional[str]] = mapped_column(sa.String(36))
    avatar_url: Mapped[Optional[str]] = mapped_column(sa.Text)
    annual_leave_entitlement: Mapped[Decimal] = mapped_column(
        sa.Numeric(5, 1), nullable=False, default=Decimal("0"),
    )
    taken_leave: Mapped[Decimal] = mapped_column(
        sa.Numeric(5, 1), nullable=False, default=Decimal("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )

    def __repr__(self) -> str:
        return f"<ProfileRow {self.full_name!r} ({self.role})>"
