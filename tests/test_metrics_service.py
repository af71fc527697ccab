from decimal import Decimal
from types import SimpleNamespace

import pytest

from askiep.db.enums import ComplianceStatus
from askiep.services import metrics_service


def _logs(*statuses, service="Speech Therapy"):
    return [{"status": s, "service_type": service} for s in statuses]


def test_empty_sets_are_zero():
    assert metrics_service.compliance_rate([]) == 0
    assert metrics_service.mastery_index([]) == 0


def test_three_received_one_partial_rounds_half_up():
    assert metrics_service.compliance_rate(_logs("Received", "Received", "Received", "Partial")) == 88


def test_all_received_is_full_compliance():
    assert metrics_service.compliance_rate(_logs("Received", "Received")) == 100


def test_all_missed_is_zero():
    assert metrics_service.compliance_rate(_logs("Missed", "Missed")) == 0


def test_rate_accepts_orm_like_objects_and_enums():
    rows = [
        SimpleNamespace(status=ComplianceStatus.RECEIVED, service_type="OT"),
        SimpleNamespace(status=ComplianceStatus.MISSED, service_type="OT"),
    ]
    assert metrics_service.compliance_rate(rows) == 50


def test_mastery_index_counts_progressing_as_half():
    progress = [{"status": "Mastered"}, {"status": "Progressing"}, {"status": "Emerging"}]
    # (1 + 0.5) / 3 = 50%
    assert metrics_service.mastery_index(progress) == 50


@pytest.mark.parametrize(
    "value, expected",
    [(Decimal("87.5"), 88), (Decimal("62.5"), 63), (Decimal("62.49"), 62), (0, 0)],
)
def test_round_half_up(value, expected):
    assert metrics_service.round_half_up(value) == expected


def test_service_breakdown_groups_by_service():
    logs = _logs("Received", "Missed", service="OT") + _logs("Partial", service="Speech")

    breakdown = metrics_service.service_breakdown(logs)

    assert breakdown == [
        {"service_type": "OT", "total": 2, "rate": 50},
        {"service_type": "Speech", "total": 1, "rate": 50},
    ]


def test_goal_summary_lists_every_status():
    summary = metrics_service.goal_summary([{"status": "Mastered"}, {"status": "Mastered"}])
    assert summary == {"Emerging": 0, "Progressing": 0, "Mastered": 2, "Regression": 0}


@pytest.mark.parametrize(
    "current, target, expected",
    [
        ("30", "60", 50),
        ("90", "60", 100),
        ("5", None, 100),
        ("abc", "10", 0),
        ("1", "0", 100),
        ("1", "3", 33),
    ],
)
def test_goal_completion_percent(current, target, expected):
    assert metrics_service.goal_completion_percent(current, target) == expected


def test_build_dashboard_totals():
    stats = metrics_service.build_dashboard(_logs("Received"), [{"status": "Regression"}])
    assert stats["total_logs"] == 1
    assert stats["total_goals"] == 1
    assert stats["compliance_rate"] == 100
    assert stats["mastery_index"] == 0


def test_goal_completion_uses_latest_entry_per_goal():
    progress = [
        {"goal_name": "Reading fluency", "current_value": "45", "target_value": "60", "status": "Progressing"},
        {"goal_name": "Sight words", "current_value": "50", "target_value": "50", "status": "Mastered"},
        {"goal_name": "Reading fluency", "current_value": "30", "target_value": "60", "status": "Emerging"},
    ]

    assert metrics_service.goal_completion(progress) == [
        {"goal_name": "Reading fluency", "status": "Progressing", "percent": 75},
        {"goal_name": "Sight words", "status": "Mastered", "percent": 100},
    ]


def test_build_dashboard_includes_goal_completion():
    stats = metrics_service.build_dashboard(
        [], [{"goal_name": "Math facts", "current_value": "1", "target_value": "3", "status": "Emerging"}]
    )
    assert stats["goal_completion"] == [{"goal_name": "Math facts", "status": "Emerging", "percent": 33}]
