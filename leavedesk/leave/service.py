"""Leave service layer — request lifecycle, approvals queue, conflict checks.

Business logic:
  - Submission creates a Pending request after validating the requester and
    the date ordering; allowance is not checked here (approval is the gate)
  - Decisions move Pending → Approved | Rejected exactly once
  - Approval queues and overlap warnings are computed from an AppState snapshot
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from leavedesk.auth.policy import can_review, visible_pending_approvals
from leavedesk.common.constants import Decision, LeaveStatus
from leavedesk.common.exceptions import (
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
)
from leavedesk.directory.schemas import User
from leavedesk.leave.conflicts import find_conflicts, validate_range
from leavedesk.leave.schemas import (
    Approved,
    LeaveRequest,
    LeaveRequestCreate,
    LeaveRequestOut,
    NewLeaveRequest,
    Rejected,
)
from leavedesk.state import AppState
from leavedesk.store.base import LeaveStore

logger = logging.getLogger(__name__)


def transition(
    request: LeaveRequest,
    decision: Decision,
    reason: Optional[str] = None,
) -> LeaveRequest:
    """Return the decided copy of a pending request.

    Approved and Rejected are terminal: deciding them again raises
    InvalidStateException and the original record is left untouched.
    """
    if not request.is_pending:
        raise InvalidStateException(request.id, request.status)

    if decision == Decision.approve:
        outcome = Approved()
    else:
        outcome = Rejected(reason=reason or "")
    return request.model_copy(update={"outcome": outcome})


# ═════════════════════════════════════════════════════════════════════
# LeaveService
# ═════════════════════════════════════════════════════════════════════


class LeaveService:
    """Async leave operations: submit, decide, approvals, conflicts."""

    # ─────────────────────────────────────────────────────────────────
    # Submit
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def submit(
        store: LeaveStore,
        requester_id: str,
        data: LeaveRequestCreate,
    ) -> LeaveRequest:
        """Create a Pending request for a known user.

        Raises NotFoundException for an unknown requester and
        InvalidRangeException when end_date precedes start_date; in both cases
        nothing is written.
        """
        users = await store.list_users()
        if not any(u.id == requester_id for u in users):
            raise NotFoundException("User", requester_id)

        validate_range(data.start_date, data.end_date)

        created = await store.create_request(
            NewLeaveRequest(user_id=requester_id, **data.model_dump())
        )
        logger.info(
            "Leave request %s submitted by %s (%s, %s → %s)",
            created.id, requester_id, created.type.value,
            created.start_date, created.end_date,
        )
        return created

    # ─────────────────────────────────────────────────────────────────
    # Decide
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def decide(
        store: LeaveStore,
        request_id: str,
        decision: Decision,
        *,
        reason: Optional[str] = None,
        actor: Optional[User] = None,
    ) -> LeaveRequest:
        """Approve or reject a pending request.

        When ``actor`` is given they must be allowed to review the request's
        author (same team, or a site-wide role) and may not decide their own.
        Returns the record as persisted by the store.
        """
        leave_req = await store.get_request(request_id)
        if leave_req is None:
            raise NotFoundException("LeaveRequest", request_id)

        decided = transition(leave_req, decision, reason)

        if actor is not None:
            users = await store.list_users()
            if not can_review(actor, leave_req, users):
                raise ForbiddenException(
                    "You are not authorized to decide this leave request."
                )

        saved = await store.update_request_status(
            request_id,
            decided.outcome,
            actor_id=actor.id if actor is not None else None,
        )
        logger.info(
            "Leave request %s %s by %s",
            request_id,
            saved.status.value.lower(),
            actor.id if actor is not None else "system",
        )
        return saved

    # ─────────────────────────────────────────────────────────────────
    # Queries over a snapshot
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def pending_approvals(state: AppState) -> list[LeaveRequest]:
        return visible_pending_approvals(state.current_user, state.requests, state.users)

    @staticmethod
    def my_requests(
        state: AppState,
        *,
        status: Optional[LeaveStatus] = None,
    ) -> list[LeaveRequest]:
        return [
            r for r in state.requests
            if r.user_id == state.current_user.id
            and (status is None or r.status == status)
        ]

    @staticmethod
    def check_conflicts(state: AppState, start_date: date, end_date: date) -> list[str]:
        """Overlap warnings against the acting user's approved teammates."""
        return find_conflicts(
            start_date,
            end_date,
            state.current_user.id,
            state.team_members(),
            state.requests,
        )

    @staticmethod
    def to_out(state: AppState, req: LeaveRequest) -> LeaveRequestOut:
        author = state.find_user(req.user_id)
        return LeaveRequestOut.from_record(
            req, user_name=author.name if author else None,
        )
