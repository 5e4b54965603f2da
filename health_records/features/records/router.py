# Health Records Feature - Router

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.database import get_session
from health_records.features.auth.dependencies import get_current_claims
from health_records.features.auth.schemas import TokenClaims
from health_records.features.records.schemas import (
    HealthRecordCreate,
    HealthRecordResponse,
    HealthRecordUpdate,
    HealthRecordWithAttachments,
)
from health_records.features.records.service import RecordService
from health_records.features.sharing.schemas import HealthRecordDetail
from health_records.features.sharing.service import SharingService
from health_records.shared.exceptions import BadRequestException
from health_records.shared.schemas import MessageResponse


router = APIRouter(prefix="/records", tags=["Health Records"])


@router.get("", response_model=List[HealthRecordWithAttachments])
async def get_health_records(
    patient_id: Optional[str] = Query(None, alias="patientId", description="Owning patient id"),
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Get all records of a patient, newest first."""
    if not patient_id:
        raise BadRequestException("Patient ID is required")
    
    records = await RecordService.list_records(session, patient_id)
    return [RecordService.record_with_attachments(record) for record in records]


@router.get("/{record_id}", response_model=HealthRecordDetail)
async def get_health_record(
    record_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Get a record with its attachments and the grants on it."""
    record = await RecordService.get_record(session, record_id)
    grants = await SharingService.list_grants_for_record(session, record_id)
    
    return HealthRecordDetail(
        **RecordService.record_with_attachments(record).model_dump(),
        shared_with=[SharingService.grant_to_response(grant) for grant in grants],
    )


@router.post("", response_model=HealthRecordWithAttachments, status_code=status.HTTP_201_CREATED)
async def create_health_record(
    record_data: HealthRecordCreate,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a record for a patient.
    
    - **patientId**, **title**, **type**, **date**, **provider**: Required
    - **content**: Free text
    - **attachments**: Created together with the record
    """
    record = await RecordService.create_record(session, record_data)
    return RecordService.record_with_attachments(record)


@router.put("/{record_id}", response_model=HealthRecordResponse)
async def update_health_record(
    record_id: str,
    update_data: HealthRecordUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Update a record. Omitted fields keep their value."""
    record = await RecordService.update_record(session, record_id, update_data)
    return RecordService.record_to_response(record)


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_health_record(
    record_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Delete a record together with its attachments and grants."""
    await RecordService.delete_record(session, record_id)
    return MessageResponse(message="Health record deleted successfully")
