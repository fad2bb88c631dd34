"""Analytics router — absence aggregates for approver roles."""

from fastapi import APIRouter, Depends

from leavedesk.analytics.schemas import AnalyticsSummaryOut, BradfordScore
from leavedesk.analytics.service import analytics_summary, bradford_scores
from leavedesk.auth.dependencies import require_role
from leavedesk.common.constants import APPROVER_ROLES
from leavedesk.state import AppState

router = APIRouter(tags=["analytics"])


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=AnalyticsSummaryOut)
async def summary(state: AppState = Depends(require_role(*APPROVER_ROLES))):
    """Monthly histogram, leave type distribution and Bradford scores."""
    return analytics_summary(state.users, state.requests)


# ── GET /bradford ───────────────────────────────────────────────────

@router.get("/bradford", response_model=list[BradfordScore])
async def bradford(state: AppState = Depends(require_role(*APPROVER_ROLES))):
    return bradford_scores(state.users, state.requests)
