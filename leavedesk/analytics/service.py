"""Allowance and absence analytics — pure aggregations over a request snapshot.

Business logic:
  - Remaining allowance (entitlement minus taken, never clamped)
  - Monthly absence histogram, attributed to the start month only
  - Leave type distribution of approved requests
  - Simplified Bradford Factor: S² × D where D is the spell count, not days
"""

from __future__ import annotations

from collections import Counter
from decimal import Decimal
from typing import Sequence

from leavedesk.analytics.schemas import (
    AnalyticsSummaryOut,
    BradfordScore,
    LeaveTypeCount,
    MonthlyAbsence,
)
from leavedesk.common.constants import (
    BRADFORD_CONCERN_THRESHOLD,
    BRADFORD_MONITOR_THRESHOLD,
    MONTH_LABELS,
    BradfordBand,
    LeaveStatus,
    LeaveType,
)
from leavedesk.directory.schemas import User
from leavedesk.leave.schemas import LeaveRequest


def _approved(requests: Sequence[LeaveRequest]) -> list[LeaveRequest]:
    return [r for r in requests if r.status == LeaveStatus.approved]


# ─────────────────────────────────────────────────────────────────────
# Allowance
# ─────────────────────────────────────────────────────────────────────

def remaining_allowance(user: User) -> Decimal:
    """Entitlement minus leave taken. Negative results are kept as-is."""
    return user.annual_leave_entitlement - user.taken_leave


# ─────────────────────────────────────────────────────────────────────
# Histograms
# ─────────────────────────────────────────────────────────────────────

def monthly_absence_histogram(requests: Sequence[LeaveRequest]) -> list[MonthlyAbsence]:
    """Twelve buckets, Jan..Dec, counting approved requests by start month.

    A request spanning several months is counted under its start month only.
    """
    counts = Counter(r.start_date.month for r in _approved(requests))
    return [
        MonthlyAbsence(month=month, label=label, requests=counts.get(month, 0))
        for month, label in enumerate(MONTH_LABELS, start=1)
    ]


def leave_type_distribution(requests: Sequence[LeaveRequest]) -> list[LeaveTypeCount]:
    """Approved request count per leave type; types with no requests are omitted."""
    counts = Counter(r.type for r in _approved(requests))
    return [
        LeaveTypeCount(type=leave_type, count=counts[leave_type])
        for leave_type in LeaveType
        if counts.get(leave_type, 0) > 0
    ]


# ─────────────────────────────────────────────────────────────────────
# Bradford Factor
# ─────────────────────────────────────────────────────────────────────

def _sick_spells_by_user(requests: Sequence[LeaveRequest]) -> Counter:
    return Counter(
        r.user_id for r in _approved(requests) if r.type == LeaveType.sick
    )


def _score(spells: int) -> int:
    # D is the spell count, not the number of sick days
    days = spells
    return spells * spells * days


def bradford_factor(user_id: str, requests: Sequence[LeaveRequest]) -> int:
    """S² × D for one user, where S is the number of approved sick requests."""
    return _score(_sick_spells_by_user(requests).get(user_id, 0))


def classify_bradford(score: int) -> BradfordBand:
    if score > BRADFORD_CONCERN_THRESHOLD:
        return BradfordBand.concern
    if score > BRADFORD_MONITOR_THRESHOLD:
        return BradfordBand.monitor
    return BradfordBand.healthy


def bradford_scores(
    users: Sequence[User],
    requests: Sequence[LeaveRequest],
) -> list[BradfordScore]:
    """Scores for every user, highest first; ties keep the user collection order."""
    spells_by_user = _sick_spells_by_user(requests)
    scores = []
    for user in users:
        spells = spells_by_user.get(user.id, 0)
        score = _score(spells)
        scores.append(
            BradfordScore(
                user_id=user.id,
                name=user.name,
                spells=spells,
                score=score,
                band=classify_bradford(score),
            )
        )
    return sorted(scores, key=lambda s: s.score, reverse=True)


def analytics_summary(
    users: Sequence[User],
    requests: Sequence[LeaveRequest],
) -> AnalyticsSummaryOut:
    return AnalyticsSummaryOut(
        absence_by_month=monthly_absence_histogram(requests),
        leave_type_distribution=leave_type_distribution(requests),
        bradford_scores=bradford_scores(users, requests),
    )
