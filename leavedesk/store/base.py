"""Store collaborator protocol.

The core never talks to a database directly; it reads and writes through an
object satisfying ``LeaveStore``. Every method is a single logical operation
that either returns the affected records or raises (``NotFoundException``,
``InvalidStateException``, ``StoreUnavailableException``).
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from leavedesk.directory.schemas import Team, User
from leavedesk.leave.schemas import (
    BankHoliday,
    LeaveRequest,
    NewLeaveRequest,
    RequestOutcome,
)


@runtime_checkable
class LeaveStore(Protocol):
    """Reader + writer over users, teams, requests and bank holidays."""

    # ── Reader ──────────────────────────────────────────────────────

    async def list_users(self) -> list[User]: ...

    async def list_teams(self) -> list[Team]: ...

    async def list_requests(self) -> list[LeaveRequest]: ...

    async def list_bank_holidays(self) -> list[BankHoliday]: ...

    async def get_request(self, request_id: str) -> Optional[LeaveRequest]: ...

    # ── Writer ──────────────────────────────────────────────────────

    async def create_request(self, fields: NewLeaveRequest) -> LeaveRequest: ...

    async def update_request_status(
        self,
        request_id: str,
        outcome: RequestOutcome,
        *,
        actor_id: Optional[str] = None,
    ) -> LeaveRequest:
        """Persist a decision; only a still-pending request may be updated."""
        ...
