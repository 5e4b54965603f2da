"""Python client: session object, expiration conversion, calls through the API."""

from datetime import datetime, timedelta, timezone

import pytest

from health_records.client import (
    ApiError,
    AuthSession,
    HealthRecordsClient,
    SessionUser,
    expiration_from_days,
)


def test_session_notifies_listeners():
    session = AuthSession()
    seen = []
    unsubscribe = session.subscribe(lambda s: seen.append(s.is_authenticated))
    
    session.sign_in("token-1", SessionUser(id="u-1", name="Jane Smith", email="jane.smith@example.com"))
    session.sign_out()
    unsubscribe()
    session.sign_in("token-2", SessionUser(id="u-1", name="Jane Smith", email="jane.smith@example.com"))
    
    assert seen == [True, False]


def test_session_authorization_header():
    session = AuthSession()
    assert session.authorization_header() == {}
    
    session.sign_in("token-1", SessionUser(id="u-1", name="Jane Smith", email="jane.smith@example.com"))
    assert session.authorization_header() == {"Authorization": "Bearer token-1"}


def test_expiration_from_days():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    
    assert expiration_from_days(None, now) is None
    assert expiration_from_days(7, now) == datetime(2024, 1, 8, tzinfo=timezone.utc)


@pytest.fixture
def api(client):
    return HealthRecordsClient(http=client)


def test_client_flow(api):
    api.signup("Jane Smith", "jane.smith@example.com", "s3cret-pass")
    assert api.session.is_authenticated
    assert api.me()["email"] == "jane.smith@example.com"
    
    api.create_patient(id="pat-123456", name="Jane Smith", birthDate="1985-04-12", gender="female")
    record = api.create_record(
        patientId="pat-123456",
        title="Influenza Vaccination",
        type="Immunization",
        date="2023-11-10T00:00:00Z",
        provider="Community Health Clinic",
    )
    
    grant = api.share_record(record["id"], "pharmacy@example.com", download=True, expires_in_days=7)
    
    assert (grant["viewPermission"], grant["downloadPermission"], grant["resharePermission"]) == (True, True, False)
    expiration = datetime.fromisoformat(grant["expiration"].replace("Z", "+00:00"))
    expected = datetime.now(timezone.utc) + timedelta(days=7)
    assert abs(expiration - expected) < timedelta(minutes=1)
    assert [g["healthRecordId"] for g in api.shared_with("pharmacy@example.com")] == [record["id"]]


def test_client_raises_api_error(api):
    with pytest.raises(ApiError) as excinfo:
        api.signin("nobody@example.com", "s3cret-pass")
    
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid credentials"
    assert not api.session.is_authenticated


def test_client_signout_drops_token(api):
    api.signup("Jane Smith", "jane.smith@example.com", "s3cret-pass")
    api.signout()
    
    with pytest.raises(ApiError) as excinfo:
        api.get_profile()
    
    assert excinfo.value.status_code == 401
