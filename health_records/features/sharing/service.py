# Record Sharing Feature - Service

from datetime import datetime
from typing import List, Optional
from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from health_records.features.records.models import HealthRecord
from health_records.features.sharing.models import SharedAccess
from health_records.features.sharing.schemas import (
    GrantResponse,
    SharedHealthRecord,
    SharedRecordResponse,
)
from health_records.features.patients.schemas import PatientContact
from health_records.core.logging import get_logger
from health_records.shared.exceptions import NotFoundException
from health_records.shared.utils import normalize_email, to_naive_utc, utcnow


logger = get_logger(__name__)


DEFAULT_VIEW_PERMISSION = True
DEFAULT_DOWNLOAD_PERMISSION = False
DEFAULT_RESHARE_PERMISSION = False


class SharingService:
    """Sharing ledger: grants of access to health records, keyed by (record, email)."""
    
    @staticmethod
    def grant_to_response(grant: SharedAccess) -> GrantResponse:
        """Convert SharedAccess row to response schema."""
        return GrantResponse(
            id=grant.id,
            email=grant.email,
            health_record_id=grant.health_record_id,
            view_permission=grant.view_permission,
            download_permission=grant.download_permission,
            reshare_permission=grant.reshare_permission,
            expiration=grant.expiration,
            created_at=grant.created_at,
            updated_at=grant.updated_at,
        )
    
    @staticmethod
    def shared_record_to_response(grant: SharedAccess) -> SharedRecordResponse:
        """Convert a grant with loaded record and owner to the grantee projection."""
        from health_records.features.records.service import RecordService
        
        record = grant.health_record
        return SharedRecordResponse(
            **SharingService.grant_to_response(grant).model_dump(),
            health_record=SharedHealthRecord(
                **RecordService.record_to_response(record).model_dump(),
                patient=PatientContact(name=record.patient.name, email=record.patient.email),
            ),
        )
    
    @staticmethod
    async def get_grant(session: AsyncSession, record_id: str, email: str) -> Optional[SharedAccess]:
        """Get the grant for (record, email), if any."""
        result = await session.execute(
            select(SharedAccess).where(
                SharedAccess.email == normalize_email(email),
                SharedAccess.health_record_id == record_id,
            )
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def share_record(
        session: AsyncSession,
        record_id: str,
        email: str,
        view_permission: Optional[bool] = None,
        download_permission: Optional[bool] = None,
        reshare_permission: Optional[bool] = None,
        expiration: Optional[datetime] = None,
    ) -> SharedAccess:
        """
        Create or overwrite the grant for (record, email).
        
        Every call writes the full permission triple and expiration: a
        permission passed as None gets its default, it does not keep the
        previous value. The record is flagged as shared.
        
        Raises:
            NotFoundException: If the record does not exist
        """
        record = await session.get(HealthRecord, record_id)
        if record is None:
            raise NotFoundException("Health record not found")
        
        email = normalize_email(email)
        permissions = {
            "view_permission": DEFAULT_VIEW_PERMISSION if view_permission is None else view_permission,
            "download_permission": DEFAULT_DOWNLOAD_PERMISSION if download_permission is None else download_permission,
            "reshare_permission": DEFAULT_RESHARE_PERMISSION if reshare_permission is None else reshare_permission,
            "expiration": to_naive_utc(expiration),
        }
        
        grant = await SharingService.get_grant(session, record_id, email)
        
        if grant is not None:
            SharingService._overwrite_grant(grant, permissions)
            action = "Updated"
        else:
            grant = SharedAccess(email=email, health_record_id=record_id, **permissions)
            session.add(grant)
            action = "Created"
        
        record.shared = True
        record.update_timestamp()
        
        try:
            await session.commit()
        except IntegrityError:
            # A concurrent share inserted the same (record, email) pair first
            await session.rollback()
            logger.warning(f"Grant on record {record_id} for {email} created concurrently, overwriting it")
            
            grant = await SharingService.get_grant(session, record_id, email)
            if grant is None:
                raise
            SharingService._overwrite_grant(grant, permissions)
            record = await session.get(HealthRecord, record_id)
            record.shared = True
            record.update_timestamp()
            await session.commit()
            action = "Updated"
        
        logger.info(
            f"{action} grant {grant.id} on record {record_id} for {email} "
            f"(view={grant.view_permission}, download={grant.download_permission}, "
            f"reshare={grant.reshare_permission}, expiration={grant.expiration})"
        )
        return grant
    
    @staticmethod
    def _overwrite_grant(grant: SharedAccess, permissions: dict) -> None:
        for field, value in permissions.items():
            setattr(grant, field, value)
        grant.update_timestamp()
    
    @staticmethod
    async def revoke_grant(session: AsyncSession, grant_id: str) -> bool:
        """
        Delete a grant.
        
        The record's ``shared`` flag is left as is.
        
        Raises:
            NotFoundException: If the grant does not exist
        """
        grant = await session.get(SharedAccess, grant_id)
        if grant is None:
            raise NotFoundException("Sharing not found")
        
        await session.delete(grant)
        await session.commit()
        
        logger.info(f"Revoked grant {grant_id} on record {grant.health_record_id} for {grant.email}")
        return True
    
    @staticmethod
    async def list_grants_for_grantee(
        session: AsyncSession, email: str, now: Optional[datetime] = None
    ) -> List[SharedAccess]:
        """
        Get the active grants for an email, each with its record and owner.
        
        Active means no expiration or an expiration strictly after ``now``.
        """
        now = to_naive_utc(now) if now is not None else utcnow()
        
        result = await session.execute(
            select(SharedAccess)
            .where(
                SharedAccess.email == normalize_email(email),
                or_(SharedAccess.expiration.is_(None), SharedAccess.expiration > now),
            )
            .options(selectinload(SharedAccess.health_record).selectinload(HealthRecord.patient))
            .order_by(SharedAccess.created_at.desc())
        )
        return list(result.scalars().all())
    
    @staticmethod
    async def list_grants_for_record(session: AsyncSession, record_id: str) -> List[SharedAccess]:
        """Get every grant on a record, expired ones included."""
        result = await session.execute(
            select(SharedAccess)
            .where(SharedAccess.health_record_id == record_id)
            .order_by(SharedAccess.created_at)
        )
        return list(result.scalars().all())
    
    @staticmethod
    async def delete_all_grants_for_record(session: AsyncSession, record_id: str) -> None:
        """
        Delete every grant on a record.
        
        Does not commit: runs inside the caller's record-deletion transaction.
        """
        await session.execute(
            delete(SharedAccess).where(SharedAccess.health_record_id == record_id)
        )
