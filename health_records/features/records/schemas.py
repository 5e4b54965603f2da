# Health Records Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator
from health_records.shared.schemas import CamelModel, UtcDateTime


class AttachmentCreate(CamelModel):
    """Attachment descriptor accepted together with a new record."""
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=1000)
    size: Optional[int] = Field(None, ge=0)


class AttachmentResponse(CamelModel):
    """Schema for attachment response."""
    id: str
    health_record_id: str
    name: str
    type: str
    url: str
    size: Optional[int] = None


class HealthRecordCreate(CamelModel):
    """Schema for creating a new health record."""
    patient_id: str = Field(..., min_length=1, description="Owning patient id")
    title: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., min_length=1, max_length=100, description="Lab Result, Medication, Visit Summary, ...")
    date: datetime
    provider: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None
    attachments: Optional[List[AttachmentCreate]] = None
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "patientId": "pat-123456",
                "title": "Complete Blood Count (CBC)",
                "type": "Lab Result",
                "date": "2023-10-02T00:00:00Z",
                "provider": "Boston Medical Labs",
                "content": "WBC: 7.2 K/uL (normal)",
                "attachments": [
                    {"name": "cbc.pdf", "type": "application/pdf", "url": "https://files.example.com/cbc.pdf", "size": 20480}
                ],
            }
        }
    }


class HealthRecordUpdate(CamelModel):
    """Schema for updating a health record. Omitted fields keep their value."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[datetime] = None
    provider: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    shared: Optional[bool] = None
    
    @field_validator("title", "type", "date", "provider", "shared", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Only content may be cleared
        if v is None:
            raise ValueError("field cannot be null")
        return v


class HealthRecordResponse(CamelModel):
    """Schema for health record response."""
    id: str
    patient_id: str
    title: str
    type: str
    date: UtcDateTime
    provider: str
    content: Optional[str] = None
    shared: bool
    created_at: UtcDateTime
    updated_at: UtcDateTime


class HealthRecordWithAttachments(HealthRecordResponse):
    """Record as returned by list and create."""
    attachments: List[AttachmentResponse] = []
