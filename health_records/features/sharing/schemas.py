# Record Sharing Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import EmailStr, field_validator
from health_records.features.patients.schemas import PatientContact
from health_records.features.records.schemas import (
    HealthRecordResponse,
    HealthRecordWithAttachments,
)
from health_records.shared.schemas import CamelModel, UtcDateTime


class ShareRecordRequest(CamelModel):
    """
    Schema for sharing a record with an email address.
    
    Omitted permissions fall back to their defaults (view on, download and
    reshare off), also when an existing grant is updated.
    """
    email: EmailStr
    view_permission: Optional[bool] = None
    download_permission: Optional[bool] = None
    reshare_permission: Optional[bool] = None
    expiration: Optional[datetime] = None
    
    @field_validator("expiration", mode="before")
    @classmethod
    def blank_expiration(cls, v):
        # "" means no expiration
        if v == "":
            return None
        return v
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "dr.johnson@hospital.org",
                "viewPermission": True,
                "downloadPermission": True,
                "resharePermission": False,
                "expiration": "2024-12-31T00:00:00Z",
            }
        }
    }


class GrantResponse(CamelModel):
    """Schema for a sharing grant."""
    id: str
    email: str
    health_record_id: str
    view_permission: bool
    download_permission: bool
    reshare_permission: bool
    expiration: Optional[UtcDateTime] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime


class SharedHealthRecord(HealthRecordResponse):
    """Record as seen by a grantee, with its owner's name and email."""
    patient: PatientContact


class SharedRecordResponse(GrantResponse):
    """Grant joined with the record it opens up."""
    health_record: SharedHealthRecord


class HealthRecordDetail(HealthRecordWithAttachments):
    """Single record view: attachments plus every grant on the record."""
    shared_with: List[GrantResponse] = []
