"""Demo data set served when no real store is configured or reachable.

Request dates are relative to today so the dashboard always has something
upcoming to show.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from leavedesk.common.constants import LeaveType, UserRole
from leavedesk.common.dates import today as _today
from leavedesk.directory.schemas import Team, User
from leavedesk.leave.schemas import Approved, BankHoliday, LeaveRequest, Pending


def demo_teams() -> list[Team]:
    return [
        Team(id="t1", name="Engineering", manager_id="u2"),
        Team(id="t2", name="Sales", manager_id="u5"),
    ]


def demo_users() -> list[User]:
    return [
        User(
            id="u1",
            name="Alice Johnson",
            role=UserRole.employee,
            team_id="t1",
            site_id="s1",
            avatar="https://picsum.photos/id/101/150/150",
            annual_leave_entitlement=Decimal("25"),
            taken_leave=Decimal("12"),
        ),
        User(
            id="u2",
            name="Bob Smith",
            role=UserRole.manager,
            team_id="t1",
            site_id="s1",
            avatar="https://picsum.photos/id/102/150/150",
            annual_leave_entitlement=Decimal("28"),
            taken_leave=Decimal("5"),
        ),
        User(
            id="u3",
            name="Charlie Davis",
            role=UserRole.employee,
            team_id="t1",
            site_id="s1",
            avatar="https://picsum.photos/id/103/150/150",
            annual_leave_entitlement=Decimal("25"),
            taken_leave=Decimal("20"),
        ),
        User(
            id="u4",
            name="Diana Prince",
            role=UserRole.site_manager,
            team_id="t2",
            site_id="s1",
            avatar="https://picsum.photos/id/104/150/150",
            annual_leave_entitlement=Decimal("30"),
            taken_leave=Decimal("15"),
        ),
    ]


def demo_requests(today: Optional[date] = None) -> list[LeaveRequest]:
    today = today or _today()
    return [
        LeaveRequest(
            id="r1",
            user_id="u1",
            start_date=today + timedelta(days=5),
            end_date=today + timedelta(days=7),
            type=LeaveType.annual,
            outcome=Pending(),
            notes="Long weekend trip",
        ),
        LeaveRequest(
            id="r2",
            user_id="u3",
            start_date=today - timedelta(days=2),
            end_date=today,
            type=LeaveType.sick,
            outcome=Approved(),
            notes="Flu",
        ),
        LeaveRequest(
            id="r3",
            user_id="u1",
            start_date=today + timedelta(days=14),
            end_date=today + timedelta(days=14),
            type=LeaveType.lieu,
            outcome=Approved(),
            is_bank_holiday_work_request=True,
        ),
    ]


def demo_bank_holidays(today: Optional[date] = None) -> list[BankHoliday]:
    year = (today or _today()).year
    return [
        BankHoliday(date=date(year, 12, 25), name="Christmas Day"),
        BankHoliday(date=date(year, 12, 26), name="Boxing Day"),
        BankHoliday(date=date(year + 1, 1, 1), name="New Year's Day"),
    ]
