"""In-memory store used for demo mode and tests."""

from __future__ import annotations

import logging
import uuid
from typing import Iterable, Optional

from leavedesk.common.exceptions import InvalidStateException, NotFoundException
from leavedesk.directory.schemas import Team, User
from leavedesk.leave.schemas import (
    BankHoliday,
    LeaveRequest,
    NewLeaveRequest,
    Pending,
    RequestOutcome,
)

logger = logging.getLogger(__name__)


class InMemoryLeaveStore:
    """List-backed ``LeaveStore``. Records are frozen, so reads hand out
    shallow copies of the lists and never the lists themselves."""

    def __init__(
        self,
        *,
        users: Iterable[User] = (),
        teams: Iterable[Team] = (),
        requests: Iterable[LeaveRequest] = (),
        bank_holidays: Iterable[BankHoliday] = (),
    ) -> None:
        self._users = list(users)
        self._teams = list(teams)
        self._requests = list(requests)
        self._bank_holidays = list(bank_holidays)

    @classmethod
    def with_demo_data(cls) -> "InMemoryLeaveStore":
        from leavedesk.store import demo

        return cls(
            users=demo.demo_users(),
            teams=demo.demo_teams(),
            requests=demo.demo_requests(),
            bank_holidays=demo.demo_bank_holidays(),
        )

    # ── Reader ──────────────────────────────────────────────────────

    async def list_users(self) -> list[User]:
        return list(self._users)

    async def list_teams(self) -> list[Team]:
        return list(self._teams)

    async def list_requests(self) -> list[LeaveRequest]:
        return list(self._requests)

    async def list_bank_holidays(self) -> list[BankHoliday]:
        return sorted(self._bank_holidays, key=lambda h: h.date)

    async def get_request(self, request_id: str) -> Optional[LeaveRequest]:
        return next((r for r in self._requests if r.id == request_id), None)

    # ── Writer ──────────────────────────────────────────────────────

    async def create_request(self, fields: NewLeaveRequest) -> LeaveRequest:
        record = LeaveRequest(
            id=f"local-{uuid.uuid4().hex[:12]}",
            outcome=Pending(),
            **fields.model_dump(),
        )
        self._requests.append(record)
        logger.debug("Created in-memory leave request %s", record.id)
        return record

    async def update_request_status(
        self,
        request_id: str,
        outcome: RequestOutcome,
        *,
        actor_id: Optional[str] = None,
    ) -> LeaveRequest:
        for idx, existing in enumerate(self._requests):
            if existing.id != request_id:
                continue
            if not existing.is_pending:
                raise InvalidStateException(request_id, existing.status)
            updated = existing.model_copy(update={"outcome": outcome})
            self._requests[idx] = updated
            return updated
        raise NotFoundException("LeaveRequest", request_id)
