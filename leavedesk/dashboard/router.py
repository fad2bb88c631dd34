"""Dashboard router — read-only KPI summary for the acting user."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from leavedesk.auth.dependencies import get_app_state
from leavedesk.common.dates import today
from leavedesk.dashboard.schemas import DashboardOut
from leavedesk.dashboard.service import DashboardService
from leavedesk.dependencies import get_store
from leavedesk.state import AppState
from leavedesk.store.base import LeaveStore

router = APIRouter()


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=DashboardOut)
async def dashboard(
    state: AppState = Depends(get_app_state),
    store: LeaveStore = Depends(get_store),
):
    """Allowance, pending counts, upcoming leave and the next bank holiday."""
    holidays = await store.list_bank_holidays()
    return DashboardService.build(state, holidays, today())
