"""Python client for the health records API."""

from health_records.client.api import ApiError, HealthRecordsClient, expiration_from_days
from health_records.client.session import AuthSession, SessionUser

__all__ = ["ApiError", "AuthSession", "HealthRecordsClient", "SessionUser", "expiration_from_days"]
