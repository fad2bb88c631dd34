"""Leave router — submit, approve/reject, approvals queue, conflicts, calendar.

All endpoints act on behalf of the ``X-User-Id`` user. Approval endpoints
enforce approver roles; per-request review scope is checked by the service.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from leavedesk.auth.dependencies import get_app_state, require_role
from leavedesk.common.constants import APPROVER_ROLES, Decision, LeaveStatus
from leavedesk.common.dates import today
from leavedesk.common.rate_limit import limiter
from leavedesk.config import settings
from leavedesk.dependencies import get_store
from leavedesk.leave.schemas import (
    BankHoliday,
    CalendarMonthOut,
    ConflictCheckOut,
    ConflictCheckRequest,
    LeaveRejectRequest,
    LeaveRequestCreate,
    LeaveRequestOut,
    LeaveSubmitOut,
)
from leavedesk.leave.service import LeaveService
from leavedesk.leave.team_calendar import month_calendar
from leavedesk.state import AppState
from leavedesk.store.base import LeaveStore

router = APIRouter(prefix="", tags=["leave"])


# ── POST /requests ──────────────────────────────────────────────────

@router.post("/requests", response_model=LeaveSubmitOut, status_code=201)
@limiter.limit(settings.RATE_LIMIT)
async def submit_leave(
    request: Request,
    body: LeaveRequestCreate,
    state: AppState = Depends(get_app_state),
    store: LeaveStore = Depends(get_store),
):
    """Submit a leave request. Overlapping approved team leave is returned as warnings."""
    created = await LeaveService.submit(store, state.current_user.id, body)
    return LeaveSubmitOut(
        request=LeaveService.to_out(state, created),
        conflicts=LeaveService.check_conflicts(state, created.start_date, created.end_date),
    )


# ── GET /requests/mine ──────────────────────────────────────────────

@router.get("/requests/mine", response_model=list[LeaveRequestOut])
async def my_requests(
    status: Optional[LeaveStatus] = Query(None),
    state: AppState = Depends(get_app_state),
):
    """The acting user's leave requests, optionally filtered by status."""
    return [
        LeaveService.to_out(state, req)
        for req in LeaveService.my_requests(state, status=status)
    ]


# ── GET /approvals ──────────────────────────────────────────────────

@router.get("/approvals", response_model=list[LeaveRequestOut])
async def pending_approvals(
    state: AppState = Depends(require_role(*APPROVER_ROLES)),
):
    """Pending requests the acting approver may decide."""
    return [
        LeaveService.to_out(state, req)
        for req in LeaveService.pending_approvals(state)
    ]


# ── PUT /requests/{id}/approve ──────────────────────────────────────

@router.put("/requests/{request_id}/approve", response_model=LeaveRequestOut)
@limiter.limit(settings.RATE_LIMIT)
async def approve_leave(
    request: Request,
    request_id: str,
    state: AppState = Depends(require_role(*APPROVER_ROLES)),
    store: LeaveStore = Depends(get_store),
):
    """Approve a pending leave request."""
    saved = await LeaveService.decide(
        store, request_id, Decision.approve, actor=state.current_user,
    )
    return LeaveService.to_out(state, saved)


# ── PUT /requests/{id}/reject ───────────────────────────────────────

@router.put("/requests/{request_id}/reject", response_model=LeaveRequestOut)
@limiter.limit(settings.RATE_LIMIT)
async def reject_leave(
    request: Request,
    request_id: str,
    body: LeaveRejectRequest,
    state: AppState = Depends(require_role(*APPROVER_ROLES)),
    store: LeaveStore = Depends(get_store),
):
    """Reject a pending leave request, with an optional reason."""
    saved = await LeaveService.decide(
        store, request_id, Decision.reject,
        reason=body.reason, actor=state.current_user,
    )
    return LeaveService.to_out(state, saved)


# ── POST /conflicts ─────────────────────────────────────────────────

@router.post("/conflicts", response_model=ConflictCheckOut)
async def check_conflicts(
    body: ConflictCheckRequest,
    state: AppState = Depends(get_app_state),
):
    """Which approved teammates are off during the given range."""
    return ConflictCheckOut(
        start_date=body.start_date,
        end_date=body.end_date,
        conflicts=LeaveService.check_conflicts(state, body.start_date, body.end_date),
    )


# ── GET /calendar ───────────────────────────────────────────────────

@router.get("/calendar", response_model=CalendarMonthOut)
async def team_calendar(
    year: Optional[int] = Query(None, ge=1900, le=2999),
    month: Optional[int] = Query(None, ge=1, le=12),
    state: AppState = Depends(get_app_state),
):
    """Approved absences for a month; defaults to the current month."""
    current = today()
    return month_calendar(
        year or current.year,
        month or current.month,
        state.requests,
        state.users,
    )


# ── GET /bank-holidays ──────────────────────────────────────────────

@router.get("/bank-holidays", response_model=list[BankHoliday])
async def bank_holidays(
    year: Optional[int] = Query(None),
    state: AppState = Depends(get_app_state),
    store: LeaveStore = Depends(get_store),
):
    """Bank holidays in date order, optionally for one year."""
    holidays = await store.list_bank_holidays()
    if year is not None:
        holidays = [h for h in holidays if h.date.year == year]
    return holidays
