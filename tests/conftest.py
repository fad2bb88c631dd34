"""Shared test fixtures — stores, app, client, header helpers, factories.

Reusable across all test modules (leave, conflicts, analytics, access, store,
dashboard). The in-memory store backs most API tests; SQL store tests use
SQLite + aiosqlite for fast isolated runs without PostgreSQL.
"""

from __future__ import annotations

import os

# Configure settings before any other import touches pydantic-settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT", "1000/minute")

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from leavedesk.common.constants import USER_ID_HEADER, LeaveType, UserRole
from leavedesk.database import Base
from leavedesk.directory.models import ProfileRow, TeamRow
from leavedesk.directory.schemas import Team, User
from leavedesk.leave.models import BankHolidayRow, LeaveRequestRow
from leavedesk.leave.schemas import (
    Approved,
    BankHoliday,
    LeaveRequest,
    Pending,
    RequestOutcome,
)
from leavedesk.main import create_app
from leavedesk.store.memory import InMemoryLeaveStore
from leavedesk.store.sql import SqlLeaveStore

# Import the audit model so its table is part of Base.metadata
import leavedesk.common.audit  # noqa: F401


# ── Identities used across the suite ────────────────────────────────

EMPLOYEE_ID = "emp-erin"
TEAMMATE_ID = "emp-evan"
MANAGER_ID = "mgr-mona"
SITE_MANAGER_ID = "site-sam"
ADMIN_ID = "admin-ada"
SALES_EMPLOYEE_ID = "emp-theo"

ENGINEERING = "team-eng"
SALES = "team-sales"


# ── Model factories ─────────────────────────────────────────────────

def _make_user(
    user_id: str,
    name: str,
    *,
    role: UserRole = UserRole.employee,
    team_id: Optional[str] = ENGINEERING,
    entitlement: str = "25",
    taken: str = "0",
) -> User:
    return User(
        id=user_id,
        name=name,
        role=role,
        team_id=team_id,
        site_id="site-1",
        annual_leave_entitlement=Decimal(entitlement),
        taken_leave=Decimal(taken),
    )


def _make_request(
    request_id: str,
    user_id: str,
    start: date,
    end: Optional[date] = None,
    *,
    type: LeaveType = LeaveType.annual,
    outcome: Optional[RequestOutcome] = None,
    notes: Optional[str] = None,
) -> LeaveRequest:
    return LeaveRequest(
        id=request_id,
        user_id=user_id,
        start_date=start,
        end_date=end or start,
        type=type,
        outcome=outcome or Pending(),
        notes=notes,
    )


def _approved(request_id: str, user_id: str, start: date, end: Optional[date] = None, **kw) -> LeaveRequest:
    return _make_request(request_id, user_id, start, end, outcome=Approved(), **kw)


def _headers(user_id: str) -> dict[str, str]:
    return {USER_ID_HEADER: user_id}


def _make_users() -> list[User]:
    return [
        _make_user(EMPLOYEE_ID, "Erin Employee", taken="10"),
        _make_user(TEAMMATE_ID, "Evan Engineer", entitlement="20", taken="22.5"),
        _make_user(MANAGER_ID, "Mona Manager", role=UserRole.manager, entitlement="28"),
        _make_user(SITE_MANAGER_ID, "Sam Site", role=UserRole.site_manager, team_id=SALES),
        _make_user(ADMIN_ID, "Ada Admin", role=UserRole.admin, team_id=SALES),
        _make_user(SALES_EMPLOYEE_ID, "Theo Sales", team_id=SALES),
    ]


def _make_teams() -> list[Team]:
    return [
        Team(id=ENGINEERING, name="Engineering", manager_id=MANAGER_ID),
        Team(id=SALES, name="Sales", manager_id=SITE_MANAGER_ID),
    ]


def _make_bank_holidays() -> list[BankHoliday]:
    return [
        BankHoliday(date=date(2026, 12, 25), name="Christmas Day"),
        BankHoliday(date=date(2026, 8, 31), name="Summer bank holiday"),
        BankHoliday(date=date(2027, 1, 1), name="New Year's Day"),
    ]


@pytest.fixture
def users() -> list[User]:
    return _make_users()


@pytest.fixture
def teams() -> list[Team]:
    return _make_teams()


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from leavedesk.common.rate_limit import limiter

    limiter.reset()
    yield


# ── In-memory store ─────────────────────────────────────────────────

@pytest.fixture
def memory_store(users, teams) -> InMemoryLeaveStore:
    return InMemoryLeaveStore(
        users=users,
        teams=teams,
        bank_holidays=_make_bank_holidays(),
    )


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app(memory_store):
    """Create a fresh app instance serving the in-memory store."""
    application = create_app(store=memory_store)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── SQL store (SQLite in-memory) ────────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def sql_session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh schema per test, dropped with the engine afterwards."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def sql_store(sql_session_factory, users, teams) -> SqlLeaveStore:
    """SqlLeaveStore seeded with the shared teams, users and bank holidays."""
    async with sql_session_factory() as session:
        session.add_all(
            TeamRow(id=t.id, name=t.name, manager_id=t.manager_id) for t in teams
        )
        session.add_all(
            ProfileRow(
                id=u.id,
                full_name=u.name,
                role=u.role,
                team_id=u.team_id,
                site_id=u.site_id,
                avatar_url=u.avatar,
                annual_leave_entitlement=u.annual_leave_entitlement,
                taken_leave=u.taken_leave,
            )
            for u in users
        )
        session.add_all(
            BankHolidayRow(holiday_date=h.date, name=h.name)
            for h in _make_bank_holidays()
        )
        await session.commit()
    return SqlLeaveStore(sql_session_factory)


async def _seed_request_row(
    session_factory: async_sessionmaker[AsyncSession],
    req: LeaveRequest,
) -> None:
    """Insert a request row directly, bypassing the store's create path."""
    async with session_factory() as session:
        session.add(
            LeaveRequestRow(
                id=req.id,
                user_id=req.user_id,
                start_date=req.start_date,
                end_date=req.end_date,
                type=req.type,
                status=req.status,
                notes=req.notes,
                rejection_reason=req.rejection_reason,
                is_bank_holiday_work_request=req.is_bank_holiday_work_request,
            )
        )
        await session.commit()
