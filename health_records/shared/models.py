from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from health_records.shared.utils import generate_id, utcnow


class Base(DeclarativeBase):
    """Declarative base for all tables."""


class TimestampMixin:
    """Mixin for adding timestamp columns to tables."""
    
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    
    def update_timestamp(self):
        """Update the updated_at timestamp."""
        self.updated_at = utcnow()


class IdMixin:
    """String UUID primary key."""
    
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id)
