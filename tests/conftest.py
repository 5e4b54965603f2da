"""Shared fixtures: a throwaway SQLite database per test."""

import os

# Settings are read at import time
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from health_records.config import settings
from health_records.database import Database
from health_records.features.patients.models import Patient
from health_records.features.records.models import Attachment, HealthRecord
from health_records.main import app


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def client(monkeypatch, database_url):
    """TestClient running the app lifespan against a fresh database."""
    monkeypatch.setattr(settings, "DATABASE_URL", database_url)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Sign up an account and return its bearer header."""
    response = client.post(
        "/api/auth/signup",
        json={"name": "Jane Smith", "email": "jane.smith@example.com", "password": "s3cret-pass"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def patient_id(client, auth_headers):
    """Create a patient through the API and return its id."""
    response = client.post(
        "/api/patients",
        json={
            "id": "pat-123456",
            "name": "Jane Smith",
            "birthDate": "1985-04-12",
            "gender": "female",
            "email": "jane.smith@example.com",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
async def session(database_url):
    """AsyncSession on a fresh database for service-level tests."""
    await Database.connect_db(database_url)
    async with Database.session_factory() as db_session:
        yield db_session
    await Database.close_db()


async def add_record(session, record_id, patient_id="pat-1", attachments=0, date=None):
    """Insert a patient (if missing) and a record with ``attachments`` attachments."""
    if await session.get(Patient, patient_id) is None:
        session.add(
            Patient(
                id=patient_id,
                name="Jane Smith",
                birth_date=datetime(1985, 4, 12).date(),
                gender="female",
                email="jane.smith@example.com",
            )
        )
    record = HealthRecord(
        id=record_id,
        patient_id=patient_id,
        title="Complete Blood Count (CBC)",
        type="Lab Result",
        date=date or datetime(2023, 10, 2),
        provider="Boston Medical Labs",
        content="WBC: 7.2 K/uL (normal)",
        attachments=[
            Attachment(name=f"page-{n}.pdf", type="application/pdf", url=f"https://files.example.com/{n}")
            for n in range(attachments)
        ],
    )
    session.add(record)
    await session.commit()
    return record


async def count_rows(session, model, **filters):
    result = await session.execute(select(func.count()).select_from(model).filter_by(**filters))
    return result.scalar_one()
