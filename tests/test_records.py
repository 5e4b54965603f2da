"""Health record CRUD and cascading delete."""

import pytest

from health_records.features.records.models import Attachment, HealthRecord
from health_records.features.records.service import RecordService
from health_records.features.sharing.models import SharedAccess
from health_records.features.sharing.service import SharingService
from health_records.shared.exceptions import NotFoundException

from conftest import add_record, count_rows


def record_payload(patient_id, **overrides):
    payload = {
        "patientId": patient_id,
        "title": "Annual Physical Examination",
        "type": "Visit Summary",
        "date": "2023-09-15T00:00:00Z",
        "provider": "Dr. Robert Chen",
        "content": "Patient in good health. Blood pressure normal at 120/80.",
    }
    payload.update(overrides)
    return payload


def test_create_record_with_attachments(client, auth_headers, patient_id):
    response = client.post(
        "/api/records",
        json=record_payload(
            patient_id,
            attachments=[
                {"name": "summary.pdf", "type": "application/pdf", "url": "https://files.example.com/summary.pdf", "size": 2048},
                {"name": "ecg.png", "type": "image/png", "url": "https://files.example.com/ecg.png"},
            ],
        ),
        headers=auth_headers,
    )
    
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Annual Physical Examination"
    assert body["patientId"] == patient_id
    assert body["shared"] is False
    assert [a["name"] for a in body["attachments"]] == ["summary.pdf", "ecg.png"]
    assert all(a["healthRecordId"] == body["id"] for a in body["attachments"])


def test_create_record_missing_patient_id(client, auth_headers):
    payload = record_payload("ignored")
    del payload["patientId"]
    
    response = client.post("/api/records", json=payload, headers=auth_headers)
    
    assert response.status_code == 400


def test_create_record_unknown_patient(client, auth_headers):
    response = client.post("/api/records", json=record_payload("pat-000000"), headers=auth_headers)
    
    assert response.status_code == 400
    assert response.json()["detail"] == "Patient not found"


def test_list_records_newest_first(client, auth_headers, patient_id):
    for title, date in [
        ("Chest X-Ray", "2023-06-08T00:00:00Z"),
        ("Cholesterol Panel", "2023-10-02T00:00:00Z"),
        ("Atorvastatin 10mg", "2023-09-15T00:00:00Z"),
    ]:
        client.post("/api/records", json=record_payload(patient_id, title=title, date=date), headers=auth_headers)
    
    response = client.get("/api/records", params={"patientId": patient_id}, headers=auth_headers)
    
    assert response.status_code == 200
    assert [r["title"] for r in response.json()] == ["Cholesterol Panel", "Atorvastatin 10mg", "Chest X-Ray"]


def test_list_records_requires_patient_id(client, auth_headers):
    response = client.get("/api/records", headers=auth_headers)
    
    assert response.status_code == 400
    assert response.json()["detail"] == "Patient ID is required"


def test_list_records_requires_auth(client):
    assert client.get("/api/records", params={"patientId": "pat-123456"}).status_code == 401


def test_get_record_detail(client, auth_headers, patient_id):
    created = client.post("/api/records", json=record_payload(patient_id), headers=auth_headers).json()
    
    response = client.get(f"/api/records/{created['id']}", headers=auth_headers)
    
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["attachments"] == []
    assert body["sharedWith"] == []


def test_get_missing_record(client, auth_headers):
    response = client.get("/api/records/rec-missing", headers=auth_headers)
    
    assert response.status_code == 404
    assert response.json()["detail"] == "Health record not found"


def test_update_record_partial(client, auth_headers, patient_id):
    created = client.post("/api/records", json=record_payload(patient_id), headers=auth_headers).json()
    
    response = client.put(
        f"/api/records/{created['id']}",
        json={"title": "Annual Physical (amended)"},
        headers=auth_headers,
    )
    
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Annual Physical (amended)"
    assert body["provider"] == "Dr. Robert Chen"
    assert body["content"] == created["content"]


def test_update_record_null_clears_content(client, auth_headers, patient_id):
    created = client.post("/api/records", json=record_payload(patient_id), headers=auth_headers).json()
    
    response = client.put(f"/api/records/{created['id']}", json={"content": None}, headers=auth_headers)
    
    assert response.status_code == 200
    assert response.json()["content"] is None
    assert response.json()["title"] == "Annual Physical Examination"


@pytest.mark.parametrize("field", ["title", "type", "date", "provider", "shared"])
def test_update_record_rejects_null_required_field(client, auth_headers, patient_id, field):
    created = client.post("/api/records", json=record_payload(patient_id), headers=auth_headers).json()
    
    response = client.put(f"/api/records/{created['id']}", json={field: None}, headers=auth_headers)
    
    assert response.status_code == 400
    assert client.get(f"/api/records/{created['id']}", headers=auth_headers).json()[field] == created[field]


def test_record_datetimes_are_utc(client, auth_headers, patient_id):
    """Stored datetimes are naive UTC but always go out with an offset."""
    body = client.post("/api/records", json=record_payload(patient_id), headers=auth_headers).json()
    
    assert body["date"] in ("2023-09-15T00:00:00Z", "2023-09-15T00:00:00+00:00")
    assert body["createdAt"].endswith(("Z", "+00:00"))
    assert body["updatedAt"].endswith(("Z", "+00:00"))


def test_update_missing_record(client, auth_headers):
    response = client.put("/api/records/rec-missing", json={"title": "x"}, headers=auth_headers)
    
    assert response.status_code == 404


def test_delete_record(client, auth_headers, patient_id):
    created = client.post("/api/records", json=record_payload(patient_id), headers=auth_headers).json()
    
    response = client.delete(f"/api/records/{created['id']}", headers=auth_headers)
    
    assert response.status_code == 200
    assert response.json() == {"message": "Health record deleted successfully"}
    assert client.get(f"/api/records/{created['id']}", headers=auth_headers).status_code == 404


def test_delete_missing_record(client, auth_headers):
    assert client.delete("/api/records/rec-missing", headers=auth_headers).status_code == 404


async def test_delete_record_removes_children(session):
    """No attachment or grant survives its record."""
    await add_record(session, "rec-1", attachments=2)
    await SharingService.share_record(session, "rec-1", "a@x.com")
    await SharingService.share_record(session, "rec-1", "b@x.com")
    
    await RecordService.delete_record(session, "rec-1")
    
    assert await count_rows(session, Attachment, health_record_id="rec-1") == 0
    assert await count_rows(session, SharedAccess, health_record_id="rec-1") == 0
    assert await count_rows(session, HealthRecord, id="rec-1") == 0


async def test_delete_record_leaves_other_records_alone(session):
    await add_record(session, "rec-1", attachments=1)
    await add_record(session, "rec-2", attachments=1)
    await SharingService.share_record(session, "rec-2", "a@x.com")
    
    await RecordService.delete_record(session, "rec-1")
    
    assert await count_rows(session, Attachment, health_record_id="rec-2") == 1
    assert await count_rows(session, SharedAccess, health_record_id="rec-2") == 1


async def test_failed_delete_rolls_back(session, monkeypatch):
    """A failure after the attachments are gone restores everything."""
    await add_record(session, "rec-1", attachments=2)
    await SharingService.share_record(session, "rec-1", "a@x.com")
    
    async def fail(session, record_id):
        raise RuntimeError("connection lost")
    
    monkeypatch.setattr(SharingService, "delete_all_grants_for_record", fail)
    
    with pytest.raises(RuntimeError):
        await RecordService.delete_record(session, "rec-1")
    
    assert await count_rows(session, Attachment, health_record_id="rec-1") == 2
    assert await count_rows(session, SharedAccess, health_record_id="rec-1") == 1
    assert await count_rows(session, HealthRecord, id="rec-1") == 1


async def test_delete_missing_record_raises(session):
    with pytest.raises(NotFoundException):
        await RecordService.delete_record(session, "rec-missing")
