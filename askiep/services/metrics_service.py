"""Derived aggregates over compliance logs and goal progress.

Every function accepts ORM rows or plain dicts (the client computes the same
numbers from cached JSON), so field access goes through ``_field``.
"""

from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from askiep.db.enums import ComplianceStatus, GoalStatus

HALF = Decimal("0.5")
HUNDRED = Decimal(100)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _status(record: Any) -> str | None:
    value = _field(record, "status")
    # Enum members compare by value once unwrapped
    return getattr(value, "value", value)


def round_half_up(value: Decimal | int | float) -> int:
    """Round to the nearest integer, halves away from zero (87.5 -> 88)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _weighted_rate(full: int, half: int, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up((Decimal(full) + HALF * half) * HUNDRED / Decimal(total))


def compliance_rate(logs: Iterable[Any]) -> int:
    """Percent of services delivered, counting Partial as half."""
    statuses = [_status(log) for log in logs]
    return _weighted_rate(
        statuses.count(ComplianceStatus.RECEIVED.value),
        statuses.count(ComplianceStatus.PARTIAL.value),
        len(statuses),
    )


def mastery_index(progress: Iterable[Any]) -> int:
    """Percent of goal entries mastered, counting Progressing as half."""
    statuses = [_status(entry) for entry in progress]
    return _weighted_rate(
        statuses.count(GoalStatus.MASTERED.value),
        statuses.count(GoalStatus.PROGRESSING.value),
        len(statuses),
    )


def service_breakdown(logs: Iterable[Any]) -> list[dict[str, Any]]:
    """Delivery rate per service type, ordered by service name."""
    by_service: dict[str, list[Any]] = {}
    for log in logs:
        service = (_field(log, "service_type") or "").strip() or "Unspecified"
        by_service.setdefault(service, []).append(log)

    return [
        {
            "service_type": service,
            "total": len(entries),
            "rate": compliance_rate(entries),
        }
        for service, entries in sorted(by_service.items())
    ]


def goal_summary(progress: Iterable[Any]) -> dict[str, int]:
    counts = Counter(_status(entry) for entry in progress)
    return {status.value: counts.get(status.value, 0) for status in GoalStatus}


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


def goal_completion_percent(current: Any, target: Any) -> int:
    """Progress toward a numeric target, capped at 100."""
    current_value = _to_decimal(current)
    target_value = _to_decimal(target)
    if target_value == 0:
        target_value = Decimal(1)
    return min(100, round_half_up(current_value / target_value * HUNDRED))


def goal_completion(progress: Iterable[Any]) -> list[dict[str, Any]]:
    """Completion toward target for each goal, using its latest entry.

    ``progress`` is newest first, so the first entry seen per goal wins.
    """
    latest: dict[str, Any] = {}
    for entry in progress:
        name = (_field(entry, "goal_name") or "").strip()
        if name and name not in latest:
            latest[name] = entry

    return [
        {
            "goal_name": name,
            "status": _status(entry),
            "percent": goal_completion_percent(
                _field(entry, "current_value"), _field(entry, "target_value")
            ),
        }
        for name, entry in latest.items()
    ]


def build_dashboard(logs: Iterable[Any], progress: Iterable[Any]) -> dict[str, Any]:
    logs = list(logs)
    progress = list(progress)
    return {
        "compliance_rate": compliance_rate(logs),
        "mastery_index": mastery_index(progress),
        "total_logs": len(logs),
        "total_goals": len(progress),
        "services": service_breakdown(logs),
        "goal_status_counts": goal_summary(progress),
        "goal_completion": goal_completion(progress),
    }
