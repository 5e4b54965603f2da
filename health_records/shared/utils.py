"""Small helpers shared by the feature modules."""

from datetime import datetime, timezone
from typing import Optional
import uuid


def utcnow() -> datetime:
    """Current instant as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_email(email: str) -> str:
    """Canonical form used for every email lookup and write."""
    return email.strip().lower()


def generate_id() -> str:
    return str(uuid.uuid4())
