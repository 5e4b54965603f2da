# Patient Management Feature - Models

from datetime import date
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from health_records.shared.models import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from health_records.features.records.models import HealthRecord


class Patient(Base, IdMixin, TimestampMixin):
    """Patient whose health records are stored and shared."""
    
    __tablename__ = "patients"
    
    # Personal information
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    
    records: Mapped[List["HealthRecord"]] = relationship(back_populates="patient")
