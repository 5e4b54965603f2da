"""Patient create/read/update."""

import pytest


def test_create_and_get_patient(client, auth_headers, patient_id):
    response = client.get(f"/api/patients/{patient_id}", headers=auth_headers)
    
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "pat-123456"
    assert body["name"] == "Jane Smith"
    assert body["birthDate"] == "1985-04-12"
    assert body["gender"] == "female"
    assert body["phone"] is None


def test_create_patient_generates_id(client, auth_headers):
    response = client.post(
        "/api/patients",
        json={"name": "Robert Chen", "birthDate": "1970-01-30", "gender": "male"},
        headers=auth_headers,
    )
    
    assert response.status_code == 201
    assert response.json()["id"]


def test_create_patient_requires_auth(client):
    response = client.post(
        "/api/patients",
        json={"name": "Robert Chen", "birthDate": "1970-01-30", "gender": "male"},
    )
    
    assert response.status_code == 401


def test_get_missing_patient(client, auth_headers):
    response = client.get("/api/patients/pat-000000", headers=auth_headers)
    
    assert response.status_code == 404
    assert response.json()["detail"] == "Patient not found"


def test_update_patient_partial(client, auth_headers, patient_id):
    response = client.put(
        f"/api/patients/{patient_id}",
        json={"phone": "(617) 555-1234", "address": "123 Main St, Boston, MA 02115"},
        headers=auth_headers,
    )
    
    assert response.status_code == 200
    body = response.json()
    assert body["phone"] == "(617) 555-1234"
    assert body["address"] == "123 Main St, Boston, MA 02115"
    assert body["name"] == "Jane Smith"
    assert body["birthDate"] == "1985-04-12"


def test_update_missing_patient(client, auth_headers):
    response = client.put("/api/patients/pat-000000", json={"phone": "555"}, headers=auth_headers)
    
    assert response.status_code == 404


@pytest.mark.parametrize("field", ["name", "birthDate", "gender"])
def test_update_patient_rejects_null_required_field(client, auth_headers, patient_id, field):
    response = client.put(f"/api/patients/{patient_id}", json={field: None}, headers=auth_headers)
    
    assert response.status_code == 400
    assert response.json()["detail"] == "Please provide all required fields"
    assert client.get(f"/api/patients/{patient_id}", headers=auth_headers).json()["name"] == "Jane Smith"


def test_update_patient_clears_optional_field(client, auth_headers, patient_id):
    client.put(f"/api/patients/{patient_id}", json={"phone": "(617) 555-1234"}, headers=auth_headers)
    
    response = client.put(f"/api/patients/{patient_id}", json={"phone": None}, headers=auth_headers)
    
    assert response.status_code == 200
    assert response.json()["phone"] is None


def test_patient_timestamps_are_utc(client, auth_headers, patient_id):
    body = client.get(f"/api/patients/{patient_id}", headers=auth_headers).json()
    
    assert body["createdAt"].endswith(("Z", "+00:00"))
    assert body["birthDate"] == "1985-04-12"
