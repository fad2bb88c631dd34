"""SQLAlchemy-backed store over the hosted snake_case tables.

Field translation lives here: ``full_name`` → ``name``, ``avatar_url`` →
``avatar``, and the flat ``status`` + ``rejection_reason`` columns ↔ the
request outcome variant. Driver and connection failures surface as
``StoreUnavailableException``; nothing is retried.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from leavedesk.common.audit import create_audit_entry
from leavedesk.common.constants import LeaveStatus
from leavedesk.common.exceptions import (
    InvalidStateException,
    NotFoundException,
    StoreUnavailableException,
)
from leavedesk.directory.models import ProfileRow, TeamRow
from leavedesk.directory.schemas import Team, User
from leavedesk.leave.models import BankHolidayRow, LeaveRequestRow
from leavedesk.leave.schemas import (
    BankHoliday,
    LeaveRequest,
    NewLeaveRequest,
    Rejected,
    RequestOutcome,
    outcome_for,
)

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# Row ↔ record translation
# ═════════════════════════════════════════════════════════════════════


def user_from_row(row: ProfileRow) -> User:
    return User(
        id=row.id,
        name=row.full_name,
        role=row.role,
        team_id=row.team_id,
        site_id=row.site_id,
        avatar=row.avatar_url,
        annual_leave_entitlement=row.annual_leave_entitlement,
        taken_leave=row.taken_leave,
    )


def team_from_row(row: TeamRow) -> Team:
    return Team(id=row.id, name=row.name, manager_id=row.manager_id)


def request_from_row(row: LeaveRequestRow) -> LeaveRequest:
    return LeaveRequest(
        id=row.id,
        user_id=row.user_id,
        start_date=row.start_date,
        end_date=row.end_date,
        type=row.type,
        outcome=outcome_for(row.status, row.rejection_reason),
        notes=row.notes,
        is_bank_holiday_work_request=bool(row.is_bank_holiday_work_request),
    )


def outcome_columns(outcome: RequestOutcome) -> dict:
    """Flatten an outcome into the ``status`` / ``rejection_reason`` columns."""
    reason = outcome.reason if isinstance(outcome, Rejected) else None
    return {"status": outcome.status, "rejection_reason": reason}


# ═════════════════════════════════════════════════════════════════════
# SqlLeaveStore
# ═════════════════════════════════════════════════════════════════════


class SqlLeaveStore:
    """``LeaveStore`` over an async session factory; one session per operation."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Store operation %r failed: %s", operation, exc)
            raise StoreUnavailableException(operation) from exc

    # ── Reader ──────────────────────────────────────────────────────

    async def list_users(self) -> list[User]:
        async with self._session("list_users") as session:
            result = await session.execute(
                select(ProfileRow).order_by(ProfileRow.created_at, ProfileRow.id)
            )
            return [user_from_row(row) for row in result.scalars().all()]

    async def list_teams(self) -> list[Team]:
        async with self._session("list_teams") as session:
            result = await session.execute(select(TeamRow).order_by(TeamRow.name))
            return [team_from_row(row) for row in result.scalars().all()]

    async def list_requests(self) -> list[LeaveRequest]:
        async with self._session("list_requests") as session:
            result = await session.execute(
                select(LeaveRequestRow).order_by(
                    LeaveRequestRow.created_at, LeaveRequestRow.id,
                )
            )
            return [request_from_row(row) for row in result.scalars().all()]

    async def list_bank_holidays(self) -> list[BankHoliday]:
        async with self._session("list_bank_holidays") as session:
            result = await session.execute(
                select(BankHolidayRow).order_by(BankHolidayRow.holiday_date)
            )
            return [
                BankHoliday(date=row.holiday_date, name=row.name)
                for row in result.scalars().all()
            ]

    async def get_request(self, request_id: str) -> Optional[LeaveRequest]:
        async with self._session("get_request") as session:
            row = await session.get(LeaveRequestRow, request_id)
            return request_from_row(row) if row is not None else None

    # ── Writer ──────────────────────────────────────────────────────

    async def create_request(self, fields: NewLeaveRequest) -> LeaveRequest:
        async with self._session("create_request") as session:
            row = LeaveRequestRow(
                user_id=fields.user_id,
                start_date=fields.start_date,
                end_date=fields.end_date,
                type=fields.type,
                status=LeaveStatus.pending,
                notes=fields.notes,
                is_bank_holiday_work_request=fields.is_bank_holiday_work_request,
            )
            session.add(row)
            await session.flush()

            await create_audit_entry(
                session,
                action="create",
                entity_type="leave_request",
                entity_id=row.id,
                actor_id=fields.user_id,
                new_values={
                    "type": fields.type.value,
                    "start_date": fields.start_date.isoformat(),
                    "end_date": fields.end_date.isoformat(),
                    "status": LeaveStatus.pending.value,
                },
            )
            record = request_from_row(row)
            await session.commit()
            return record

    async def update_request_status(
        self,
        request_id: str,
        outcome: RequestOutcome,
        *,
        actor_id: Optional[str] = None,
    ) -> LeaveRequest:
        columns = outcome_columns(outcome)
        async with self._session("update_request_status") as session:
            # Guarded write: a concurrent decision must not be overwritten
            result = await session.execute(
                update(LeaveRequestRow)
                .where(
                    LeaveRequestRow.id == request_id,
                    LeaveRequestRow.status == LeaveStatus.pending,
                )
                .values(**columns, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                existing = await session.get(LeaveRequestRow, request_id)
                if existing is None:
                    raise NotFoundException("LeaveRequest", request_id)
                raise InvalidStateException(request_id, existing.status)

            await create_audit_entry(
                session,
                action="approve" if columns["status"] == LeaveStatus.approved else "reject",
                entity_type="leave_request",
                entity_id=request_id,
                actor_id=actor_id,
                old_values={"status": LeaveStatus.pending.value},
                new_values={
                    "status": columns["status"].value,
                    "rejection_reason": columns["rejection_reason"],
                },
            )
            row = (
                await session.execute(
                    select(LeaveRequestRow)
                    .where(LeaveRequestRow.id == request_id)
                    .execution_options(populate_existing=True)
                )
            ).scalar_one()
            record = request_from_row(row)
            await session.commit()
            return record
