"""Directory Pydantic v2 schemas — users and teams.

``User`` and ``Team`` are the immutable records the core computes over;
``UserOut`` is the API shape with the remaining allowance filled in.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from leavedesk.common.constants import UserRole


class User(BaseModel):
    """A person who can request leave; read-only to the core."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    role: UserRole = UserRole.employee
    team_id: Optional[str] = None
    site_id: Optional[str] = None
    avatar: Optional[str] = None
    annual_leave_entitlement: Decimal = Field(Decimal("0"), ge=0)
    taken_leave: Decimal = Field(Decimal("0"), ge=0)


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    manager_id: Optional[str] = None


class UserOut(BaseModel):
    """User with derived allowance, as returned by the API."""

    id: str
    name: str
    role: UserRole
    team_id: Optional[str] = None
    site_id: Optional[str] = None
    avatar: Optional[str] = None
    annual_leave_entitlement: Decimal
    taken_leave: Decimal
    remaining_allowance: Decimal

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        from leavedesk.analytics.service import remaining_allowance

        return cls(
            **user.model_dump(),
            remaining_allowance=remaining_allowance(user),
        )
