"""Directory routers — users and teams (read-only)."""

from fastapi import APIRouter, Depends

from leavedesk.auth.dependencies import get_app_state
from leavedesk.common.exceptions import NotFoundException
from leavedesk.directory.schemas import Team, UserOut
from leavedesk.state import AppState

users_router = APIRouter(tags=["users"])
teams_router = APIRouter(tags=["teams"])


# ═════════════════════════════════════════════════════════════════════
# Users
# ═════════════════════════════════════════════════════════════════════


@users_router.get("", response_model=list[UserOut])
async def list_users(state: AppState = Depends(get_app_state)):
    """Everyone in the directory, for the user switcher."""
    return [UserOut.from_user(u) for u in state.users]


@users_router.get("/me", response_model=UserOut)
async def current_user(state: AppState = Depends(get_app_state)):
    return UserOut.from_user(state.current_user)


# ═════════════════════════════════════════════════════════════════════
# Teams
# ═════════════════════════════════════════════════════════════════════


@teams_router.get("", response_model=list[Team])
async def list_teams(state: AppState = Depends(get_app_state)):
    return state.teams


@teams_router.get("/{team_id}/members", response_model=list[UserOut])
async def team_members(team_id: str, state: AppState = Depends(get_app_state)):
    """Members of one team; 404 for an unknown team id."""
    if not any(t.id == team_id for t in state.teams):
        raise NotFoundException("Team", team_id)
    return [UserOut.from_user(u) for u in state.team_members(team_id)]
