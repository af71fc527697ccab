import datetime as dt
import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from askiep.db.models import BehaviorLog, ChildProfile, CommLogEntry, ComplianceLog


def _log(child_id, status, day="2026-01-05", service="Speech Therapy"):
    return {"child_id": str(child_id), "date": day, "service_type": service, "status": status}


@pytest.mark.asyncio
async def test_compliance_logs_newest_date_first(client, child):
    await client.post("/api/compliance", json=_log(child.id, "Received", day="2026-01-01"))
    await client.post("/api/compliance", json=_log(child.id, "Missed", day="2026-02-01"))

    response = await client.get(f"/api/compliance/{child.id}")

    assert response.status_code == 200
    assert [row["date"] for row in response.json()] == ["2026-02-01", "2026-01-01"]


@pytest.mark.asyncio
async def test_compliance_rejects_future_date(client, child, db: Session):
    tomorrow = (dt.date.today() + dt.timedelta(days=1)).isoformat()
    response = await client.post("/api/compliance", json=_log(child.id, "Received", day=tomorrow))

    assert response.status_code == 400
    assert "future" in response.json()["error"]
    assert db.query(ComplianceLog).count() == 0


@pytest.mark.asyncio
async def test_compliance_rejects_unknown_status(client, child):
    response = await client.post("/api/compliance", json=_log(child.id, "Skipped"))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_write_for_unknown_child_is_not_found(client):
    response = await client.post("/api/compliance", json=_log(uuid.uuid4(), "Received"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_read_for_unknown_child_is_empty(client):
    response = await client.get(f"/api/compliance/{uuid.uuid4()}")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_goal_progress_defaults_to_emerging(client, child):
    response = await client.post(
        "/api/progress",
        json={"child_id": str(child.id), "goal_name": "Reading fluency", "target_value": "60"},
    )

    assert response.status_code == 201
    assert response.json()["status"] == "Emerging"

    listed = await client.get(f"/api/progress/{child.id}")
    assert len(listed.json()) == 1


@pytest.mark.asyncio
async def test_comm_log_round_trip(client, child):
    response = await client.post(
        "/api/comms",
        json={
            "child_id": str(child.id),
            "date": "2026-02-10",
            "contact_name": "Ms. Rivera",
            "method": "IEP Meeting",
            "summary": "Discussed reading minutes",
            "follow_up_needed": True,
        },
    )
    assert response.status_code == 201

    listed = (await client.get(f"/api/comms/{child.id}")).json()
    assert listed[0]["method"] == "IEP Meeting"
    assert listed[0]["follow_up_needed"] is True


@pytest.mark.asyncio
async def test_behavior_intensity_out_of_range_is_rejected(client, child, db: Session):
    response = await client.post(
        "/api/behavior",
        json={
            "child_id": str(child.id),
            "date": "2026-02-10",
            "behavior": "Left seat",
            "intensity": 6,
        },
    )

    assert response.status_code == 400
    assert db.query(BehaviorLog).count() == 0


@pytest.mark.asyncio
async def test_behavior_log_round_trip(client, child):
    response = await client.post(
        "/api/behavior",
        json={
            "child_id": str(child.id),
            "date": "2026-02-10",
            "time": "10:30:00",
            "antecedent": "Transition to math",
            "behavior": "Refused work",
            "consequence": "Break offered",
            "intensity": 3,
            "duration_minutes": 10,
        },
    )
    assert response.status_code == 201
    assert response.json()["time"] == "10:30:00"
    assert response.json()["intensity"] == 3


@pytest.mark.asyncio
async def test_letter_saved_with_id_updates_in_place(client, child):
    created = await client.post(
        "/api/letters",
        json={"child_id": str(child.id), "title": "Records request", "content": "Draft 1"},
    )
    assert created.status_code == 201
    letter_id = created.json()["id"]

    updated = await client.post(
        "/api/letters",
        json={
            "id": letter_id,
            "child_id": str(child.id),
            "title": "Records request",
            "content": "Draft 2",
        },
    )

    assert updated.status_code == 200
    assert updated.json()["id"] == letter_id
    listed = (await client.get(f"/api/letters/{child.id}")).json()
    assert [row["content"] for row in listed] == ["Draft 2"]


@pytest.mark.asyncio
async def test_letter_update_with_unknown_id_is_not_found(client, child):
    response = await client.post(
        "/api/letters",
        json={
            "id": str(uuid.uuid4()),
            "child_id": str(child.id),
            "title": "Missing",
            "content": "Nothing here",
        },
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_dashboard_stats(client, child):
    for status in ("Received", "Received", "Received", "Partial"):
        await client.post("/api/compliance", json=_log(child.id, status))
    for goal, status, current in (("Sight words", "Mastered", "20"), ("Fluency", "Progressing", "30")):
        await client.post(
            "/api/progress",
            json={
                "child_id": str(child.id),
                "goal_name": goal,
                "current_value": current,
                "target_value": "40",
                "status": status,
            },
        )

    response = await client.get(f"/api/dashboard/{child.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["compliance_rate"] == 88
    assert data["mastery_index"] == 75
    assert data["services"] == [{"service_type": "Speech Therapy", "total": 4, "rate": 88}]
    assert data["goal_status_counts"]["Mastered"] == 1
    completion = {row["goal_name"]: row for row in data["goal_completion"]}
    assert completion["Sight words"]["percent"] == 50
    assert completion["Fluency"] == {"goal_name": "Fluency", "status": "Progressing", "percent": 75}


def test_comm_method_is_a_closed_set(db: Session, child):
    db.add(CommLogEntry(child_id=child.id, date=dt.date(2026, 1, 5), contact_name="Office", method="Fax"))

    with pytest.raises(IntegrityError):
        db.flush()


def test_advocacy_level_is_a_closed_set(db: Session):
    db.add(ChildProfile(owner_key="closed-set", name="Sam", advocacy_level="Expert"))

    with pytest.raises(IntegrityError):
        db.flush()
