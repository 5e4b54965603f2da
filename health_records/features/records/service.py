# Health Records Feature - Service

from typing import List
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from health_records.features.patients.models import Patient
from health_records.features.records.models import Attachment, HealthRecord
from health_records.features.records.schemas import (
    AttachmentResponse,
    HealthRecordCreate,
    HealthRecordResponse,
    HealthRecordUpdate,
    HealthRecordWithAttachments,
)
from health_records.features.sharing.service import SharingService
from health_records.core.logging import get_logger
from health_records.shared.exceptions import BadRequestException, NotFoundException
from health_records.shared.utils import to_naive_utc


logger = get_logger(__name__)


class RecordService:
    """Service class for health record operations."""
    
    @staticmethod
    def record_to_response(record: HealthRecord) -> HealthRecordResponse:
        """Convert HealthRecord row to response schema (no children)."""
        return HealthRecordResponse(
            id=record.id,
            patient_id=record.patient_id,
            title=record.title,
            type=record.type,
            date=record.date,
            provider=record.provider,
            content=record.content,
            shared=record.shared,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
    
    @staticmethod
    def record_with_attachments(record: HealthRecord) -> HealthRecordWithAttachments:
        """Convert HealthRecord row with loaded attachments to response schema."""
        return HealthRecordWithAttachments(
            **RecordService.record_to_response(record).model_dump(),
            attachments=[
                AttachmentResponse(
                    id=attachment.id,
                    health_record_id=attachment.health_record_id,
                    name=attachment.name,
                    type=attachment.type,
                    url=attachment.url,
                    size=attachment.size,
                )
                for attachment in record.attachments
            ],
        )
    
    @staticmethod
    async def list_records(session: AsyncSession, patient_id: str) -> List[HealthRecord]:
        """Get all records of a patient, newest record date first."""
        result = await session.execute(
            select(HealthRecord)
            .where(HealthRecord.patient_id == patient_id)
            .options(selectinload(HealthRecord.attachments))
            .order_by(HealthRecord.date.desc())
        )
        return list(result.scalars().all())
    
    @staticmethod
    async def get_record(session: AsyncSession, record_id: str) -> HealthRecord:
        """
        Get a record with its attachments.
        
        Raises:
            NotFoundException: If the record does not exist
        """
        result = await session.execute(
            select(HealthRecord)
            .where(HealthRecord.id == record_id)
            .options(selectinload(HealthRecord.attachments))
        )
        record = result.scalar_one_or_none()
        
        if record is None:
            raise NotFoundException("Health record not found")
        
        return record
    
    @staticmethod
    async def create_record(session: AsyncSession, record_data: HealthRecordCreate) -> HealthRecord:
        """
        Create a record and its attachments in one commit.
        
        Raises:
            BadRequestException: If the owning patient does not exist
        """
        patient = await session.get(Patient, record_data.patient_id)
        if patient is None:
            raise BadRequestException("Patient not found")
        
        record = HealthRecord(
            patient_id=record_data.patient_id,
            title=record_data.title,
            type=record_data.type,
            date=to_naive_utc(record_data.date),
            provider=record_data.provider,
            content=record_data.content,
            shared=False,
            attachments=[
                Attachment(**attachment.model_dump()) for attachment in record_data.attachments or []
            ],
        )
        session.add(record)
        await session.commit()
        
        logger.info(
            f"Created record {record.id} '{record.title}' for patient {record.patient_id} "
            f"with {len(record.attachments)} attachment(s)"
        )
        return record
    
    @staticmethod
    async def update_record(
        session: AsyncSession, record_id: str, update_data: HealthRecordUpdate
    ) -> HealthRecord:
        """
        Update a record in place. Only supplied fields change; an explicit
        null clears ``content``.
        """
        record = await session.get(HealthRecord, record_id)
        if record is None:
            raise NotFoundException("Health record not found")
        
        changes = update_data.model_dump(exclude_unset=True)
        if "date" in changes:
            changes["date"] = to_naive_utc(changes["date"])
        
        for field, value in changes.items():
            setattr(record, field, value)
        
        record.update_timestamp()
        await session.commit()
        
        logger.info(f"Updated record {record_id}: {list(changes.keys())}")
        return record
    
    @staticmethod
    async def delete_record(session: AsyncSession, record_id: str) -> bool:
        """
        Delete a record together with its attachments and sharing grants.
        
        The three deletes share one transaction; on any failure nothing is
        removed.
        """
        record = await session.get(HealthRecord, record_id)
        if record is None:
            raise NotFoundException("Health record not found")
        
        try:
            await session.execute(
                delete(Attachment).where(Attachment.health_record_id == record_id)
            )
            await SharingService.delete_all_grants_for_record(session, record_id)
            await session.execute(delete(HealthRecord).where(HealthRecord.id == record_id))
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception(f"Failed to delete record {record_id}, rolled back")
            raise
        
        logger.info(f"Deleted record {record_id} with its attachments and grants")
        return True
