# Patient Management Feature - Schemas

from typing import Optional
from datetime import date
from pydantic import EmailStr, Field, field_validator
from health_records.shared.schemas import CamelModel, UtcDateTime


class CreatePatientRequest(CamelModel):
    """Request schema for creating a new patient."""
    id: Optional[str] = Field(None, min_length=1, max_length=64, description="Caller supplied id, e.g. pat-123456")
    name: str = Field(..., min_length=1, max_length=100)
    birth_date: date
    gender: str = Field(..., min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)


class UpdatePatientRequest(CamelModel):
    """Request schema for updating patient information."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    birth_date: Optional[date] = None
    gender: Optional[str] = Field(None, min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)
    
    @field_validator("name", "birth_date", "gender", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class PatientResponse(CamelModel):
    """Response schema for patient data."""
    id: str
    name: str
    birth_date: date
    gender: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime


class PatientContact(CamelModel):
    """Owner projection exposed to grantees: name and email only."""
    name: str
    email: Optional[str] = None
