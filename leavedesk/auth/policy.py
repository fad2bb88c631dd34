"""Role-based visibility rules for approvals and analytics.

Pure functions over the in-memory snapshot — no store access, no side effects.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from leavedesk.common.constants import APPROVER_ROLES, SITE_WIDE_ROLES, UserRole
from leavedesk.directory.schemas import User
from leavedesk.leave.schemas import LeaveRequest


def can_approve(role: UserRole) -> bool:
    return role in APPROVER_ROLES


def can_view_analytics(role: UserRole) -> bool:
    return role in APPROVER_ROLES


def has_site_wide_visibility(role: UserRole) -> bool:
    return role in SITE_WIDE_ROLES


def _team_member_ids(acting_user: User, all_users: Iterable[User]) -> set[str]:
    # No team means no teammates; a missing team_id is not a shared team.
    if acting_user.team_id is None:
        return set()
    return {u.id for u in all_users if u.team_id == acting_user.team_id}


def visible_pending_approvals(
    acting_user: User,
    all_requests: Sequence[LeaveRequest],
    all_users: Sequence[User],
) -> list[LeaveRequest]:
    """Pending requests the acting user may act on, in collection order.

    Site managers and administrators see every pending request; everyone else
    sees pending requests from their own team. Nobody sees their own.
    """
    if has_site_wide_visibility(acting_user.role):
        return [
            r for r in all_requests
            if r.is_pending and r.user_id != acting_user.id
        ]

    member_ids = _team_member_ids(acting_user, all_users)
    return [
        r for r in all_requests
        if r.is_pending
        and r.user_id in member_ids
        and r.user_id != acting_user.id
    ]


def can_review(
    acting_user: User,
    request: LeaveRequest,
    all_users: Sequence[User],
) -> bool:
    """Whether the acting user may approve or reject this particular request.

    Status is ignored here; the lifecycle transition rejects terminal requests.
    """
    if not can_approve(acting_user.role) or request.user_id == acting_user.id:
        return False
    if has_site_wide_visibility(acting_user.role):
        return True
    return request.user_id in _team_member_ids(acting_user, all_users)
