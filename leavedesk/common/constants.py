"""Enums and constants for LeaveDesk — values match the strings held by the store."""

from __future__ import annotations

import enum


# ── Directory / Roles ───────────────────────────────────────────────

class UserRole(str, enum.Enum):
    employee = "Employee"
    manager = "Manager"
    site_manager = "Site Manager"
    admin = "Administrator"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveType(str, enum.Enum):
    annual = "Annual Leave"
    sick = "Sick Leave"
    wfh = "Working from Home"
    lieu = "Time in Lieu"
    unpaid = "Unpaid Leave"


class LeaveStatus(str, enum.Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


class Decision(str, enum.Enum):
    approve = "approve"
    reject = "reject"


# ── Analytics ───────────────────────────────────────────────────────

class BradfordBand(str, enum.Enum):
    healthy = "Healthy"
    monitor = "Monitor"
    concern = "Concern"


# ── Role groups ─────────────────────────────────────────────────────

# Roles allowed to approve requests and open analytics
APPROVER_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.manager, UserRole.site_manager, UserRole.admin}
)

# Roles whose approval queue spans every team
SITE_WIDE_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.site_manager, UserRole.admin}
)

# ── Misc constants ──────────────────────────────────────────────────

BRADFORD_CONCERN_THRESHOLD = 50
BRADFORD_MONITOR_THRESHOLD = 20

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

UPCOMING_LEAVE_LIMIT = 3
USER_ID_HEADER = "X-User-Id"
