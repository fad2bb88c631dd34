"""Analytics test suite — allowance, histograms, Bradford Factor, API gates."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from leavedesk.analytics.service import (
    analytics_summary,
    bradford_factor,
    bradford_scores,
    classify_bradford,
    leave_type_distribution,
    monthly_absence_histogram,
    remaining_allowance,
)
from leavedesk.common.constants import BradfordBand, LeaveType
from leavedesk.leave.schemas import Rejected
from tests.conftest import (
    ADMIN_ID,
    EMPLOYEE_ID,
    MANAGER_ID,
    SALES_EMPLOYEE_ID,
    TEAMMATE_ID,
    _approved,
    _headers,
    _make_request,
    _make_user,
)


def _sick_spells(user_id: str, n: int):
    return [
        _approved(f"{user_id}-s{i}", user_id, date(2026, 1, 1 + i), type=LeaveType.sick)
        for i in range(n)
    ]


# ═════════════════════════════════════════════════════════════════════
# 1. Remaining allowance
# ═════════════════════════════════════════════════════════════════════


class TestRemainingAllowance:
    def test_entitlement_minus_taken(self):
        user = _make_user("u", "U", entitlement="25", taken="12")
        assert remaining_allowance(user) == Decimal("13")

    def test_negative_not_clamped(self):
        user = _make_user("u", "U", entitlement="20", taken="22.5")
        assert remaining_allowance(user) == Decimal("-2.5")

    def test_half_days(self):
        user = _make_user("u", "U", entitlement="25", taken="0.5")
        assert remaining_allowance(user) == Decimal("24.5")


# ═════════════════════════════════════════════════════════════════════
# 2. Monthly histogram & type distribution
# ═════════════════════════════════════════════════════════════════════


class TestMonthlyAbsenceHistogram:
    def test_twelve_buckets_jan_to_dec(self):
        buckets = monthly_absence_histogram([])
        assert [b.label for b in buckets][:3] == ["Jan", "Feb", "Mar"]
        assert [b.month for b in buckets] == list(range(1, 13))
        assert all(b.requests == 0 for b in buckets)

    def test_spanning_request_counts_start_month_only(self):
        req = _approved("r1", EMPLOYEE_ID, date(2026, 3, 28), date(2026, 4, 3))
        buckets = monthly_absence_histogram([req])
        assert buckets[2].requests == 1
        assert buckets[3].requests == 0

    def test_year_agnostic_and_approved_only(self):
        requests = [
            _approved("r1", EMPLOYEE_ID, date(2025, 6, 2)),
            _approved("r2", TEAMMATE_ID, date(2026, 6, 9)),
            _make_request("r3", TEAMMATE_ID, date(2026, 6, 16)),
            _make_request("r4", TEAMMATE_ID, date(2026, 6, 23), outcome=Rejected()),
        ]
        assert monthly_absence_histogram(requests)[5].requests == 2


class TestLeaveTypeDistribution:
    def test_declaration_order_and_zero_types_omitted(self):
        requests = [
            _approved("r1", EMPLOYEE_ID, date(2026, 1, 5), type=LeaveType.lieu),
            _approved("r2", EMPLOYEE_ID, date(2026, 1, 6), type=LeaveType.annual),
            _approved("r3", TEAMMATE_ID, date(2026, 1, 7), type=LeaveType.annual),
            _make_request("r4", TEAMMATE_ID, date(2026, 1, 8), type=LeaveType.sick),
        ]
        result = leave_type_distribution(requests)
        assert [(c.type, c.count) for c in result] == [
            (LeaveType.annual, 2),
            (LeaveType.lieu, 1),
        ]

    def test_empty(self):
        assert leave_type_distribution([]) == []


# ═════════════════════════════════════════════════════════════════════
# 3. Bradford Factor
# ═════════════════════════════════════════════════════════════════════


class TestBradfordFactor:
    def test_three_spells_is_monitor(self):
        score = bradford_factor(EMPLOYEE_ID, _sick_spells(EMPLOYEE_ID, 3))
        assert score == 27
        assert classify_bradford(score) == BradfordBand.monitor

    def test_no_spells_is_healthy(self):
        score = bradford_factor(EMPLOYEE_ID, [])
        assert score == 0
        assert classify_bradford(score) == BradfordBand.healthy

    def test_eight_spells_is_concern(self):
        score = bradford_factor(EMPLOYEE_ID, _sick_spells(EMPLOYEE_ID, 8))
        assert score == 512
        assert classify_bradford(score) == BradfordBand.concern

    def test_only_approved_sick_requests_are_spells(self):
        requests = [
            _approved("r1", EMPLOYEE_ID, date(2026, 1, 5), type=LeaveType.annual),
            _make_request("r2", EMPLOYEE_ID, date(2026, 1, 6), type=LeaveType.sick),
            _approved("r3", TEAMMATE_ID, date(2026, 1, 7), type=LeaveType.sick),
            _approved("r4", EMPLOYEE_ID, date(2026, 1, 8), date(2026, 1, 12), type=LeaveType.sick),
        ]
        # One spell regardless of its length
        assert bradford_factor(EMPLOYEE_ID, requests) == 1

    @pytest.mark.parametrize(
        "score, band",
        [
            (20, BradfordBand.healthy),
            (21, BradfordBand.monitor),
            (50, BradfordBand.monitor),
            (51, BradfordBand.concern),
        ],
    )
    def test_band_thresholds_are_exclusive(self, score, band):
        assert classify_bradford(score) == band

    def test_scores_sorted_descending_stable(self, users):
        requests = _sick_spells(TEAMMATE_ID, 2) + _sick_spells(SALES_EMPLOYEE_ID, 3)
        scores = bradford_scores(users, requests)

        assert [s.user_id for s in scores[:2]] == [SALES_EMPLOYEE_ID, TEAMMATE_ID]
        assert [s.score for s in scores[:2]] == [27, 8]
        # Zero scorers keep directory order
        assert [s.user_id for s in scores[2:]] == [
            EMPLOYEE_ID, MANAGER_ID, "site-sam", ADMIN_ID,
        ]
        assert scores[0].band == BradfordBand.monitor
        assert scores[0].name == "Theo Sales"

    def test_summary_bundles_aggregates(self, users):
        summary = analytics_summary(users, _sick_spells(EMPLOYEE_ID, 1))
        assert len(summary.absence_by_month) == 12
        assert summary.leave_type_distribution[0].type == LeaveType.sick
        assert len(summary.bradford_scores) == len(users)


# ═════════════════════════════════════════════════════════════════════
# 4. API ENDPOINT TESTS (via HTTP client)
# ═════════════════════════════════════════════════════════════════════


class TestAnalyticsApi:
    async def test_employee_forbidden(self, client):
        resp = await client.get("/api/v1/analytics", headers=_headers(EMPLOYEE_ID))
        assert resp.status_code == 403

    async def test_manager_sees_summary(self, client, memory_store):
        memory_store._requests.extend(_sick_spells(TEAMMATE_ID, 3))
        resp = await client.get("/api/v1/analytics", headers=_headers(MANAGER_ID))

        assert resp.status_code == 200
        data = resp.json()
        assert data["absence_by_month"][0]["requests"] == 3
        assert data["leave_type_distribution"] == [{"type": "Sick Leave", "count": 3}]
        assert data["bradford_scores"][0]["user_id"] == TEAMMATE_ID
        assert data["bradford_scores"][0]["band"] == "Monitor"

    async def test_bradford_endpoint(self, client, memory_store):
        memory_store._requests.extend(_sick_spells(EMPLOYEE_ID, 8))
        resp = await client.get("/api/v1/analytics/bradford", headers=_headers(ADMIN_ID))
        assert resp.status_code == 200
        top = resp.json()[0]
        assert top == {
            "user_id": EMPLOYEE_ID,
            "name": "Erin Employee",
            "spells": 8,
            "score": 512,
            "band": "Concern",
        }
