# Health Records Feature - Models

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from health_records.shared.models import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from health_records.features.patients.models import Patient
    from health_records.features.sharing.models import SharedAccess


class HealthRecord(Base, IdMixin, TimestampMixin):
    """
    Health record owned by one patient.
    
    ``shared`` is set whenever a grant is created or updated for the record
    and is not cleared on revoke.
    """
    
    __tablename__ = "health_records"
    
    patient_id: Mapped[str] = mapped_column(ForeignKey("patients.id"), index=True, nullable=False)
    
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)  # Lab Result, Medication, ...
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    provider: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    shared: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    
    patient: Mapped["Patient"] = relationship(back_populates="records")
    attachments: Mapped[List["Attachment"]] = relationship(back_populates="health_record")
    shared_with: Mapped[List["SharedAccess"]] = relationship(back_populates="health_record")
    
    def __repr__(self) -> str:
        return f"<HealthRecord(id={self.id}, patient_id={self.patient_id}, title={self.title!r})>"


class Attachment(Base, IdMixin, TimestampMixin):
    """File attached to a health record; lives and dies with it."""
    
    __tablename__ = "attachments"
    
    health_record_id: Mapped[str] = mapped_column(
        ForeignKey("health_records.id"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    
    health_record: Mapped["HealthRecord"] = relationship(back_populates="attachments")
