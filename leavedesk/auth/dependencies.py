"""Auth dependencies — acting-user resolution, RBAC enforcement.

The acting user is whoever the ``X-User-Id`` header names (the dashboard's
"switch user" control). There are no credentials; an unknown id is a 401.
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request
from fastapi.exceptions import HTTPException

from leavedesk.common.constants import USER_ID_HEADER, UserRole
from leavedesk.common.exceptions import ForbiddenException, NotFoundException
from leavedesk.dependencies import get_store
from leavedesk.state import AppState
from leavedesk.store.base import LeaveStore


def _extract_user_id(request: Request) -> str:
    """Extract the acting user id from the request headers."""
    user_id = request.headers.get(USER_ID_HEADER, "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail=f"Missing {USER_ID_HEADER} header.")
    return user_id


# ── Core dependency ─────────────────────────────────────────────────

async def get_app_state(
    request: Request,
    store: LeaveStore = Depends(get_store),
) -> AppState:
    """Load a fresh snapshot for the acting user."""
    user_id = _extract_user_id(request)
    try:
        return await AppState.load(store, user_id)
    except NotFoundException:
        raise HTTPException(status_code=401, detail="Unknown user.")


# ── Role-based dependency ───────────────────────────────────────────

def require_role(*allowed_roles: UserRole) -> Callable:
    """Return a FastAPI dependency that enforces role membership."""

    async def _check(state: AppState = Depends(get_app_state)) -> AppState:
        role = state.current_user.role
        if role not in allowed_roles:
            raise ForbiddenException(
                detail=f"Role '{role.value}' is not permitted. Required: {[r.value for r in allowed_roles]}.",
            )
        return state

    return _check
