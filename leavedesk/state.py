"""Per-request application state: who is acting, and the snapshot they act on.

Built by the composition root (``auth.dependencies.get_app_state``) and
passed explicitly to the services that need it. Snapshots are never treated
as authoritative after a write; callers reload from the store.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from leavedesk.common.exceptions import NotFoundException
from leavedesk.directory.schemas import Team, User
from leavedesk.leave.schemas import LeaveRequest
from leavedesk.store.base import LeaveStore


class AppState(BaseModel):
    current_user: User
    users: list[User] = Field(default_factory=list)
    requests: list[LeaveRequest] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)

    @classmethod
    async def load(cls, store: LeaveStore, current_user_id: str) -> "AppState":
        """Snapshot users, teams and requests; the acting user must exist."""
        users = await store.list_users()
        current = next((u for u in users if u.id == current_user_id), None)
        if current is None:
            raise NotFoundException("User", current_user_id)
        return cls(
            current_user=current,
            users=users,
            requests=await store.list_requests(),
            teams=await store.list_teams(),
        )

    def find_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    def user_names(self) -> dict[str, str]:
        return {u.id: u.name for u in self.users}

    def team_members(self, team_id: Optional[str] = None) -> list[User]:
        """Users sharing ``team_id`` (defaults to the acting user's team)."""
        target = team_id if team_id is not None else self.current_user.team_id
        return [u for u in self.users if u.team_id == target]
