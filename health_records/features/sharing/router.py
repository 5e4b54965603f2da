# Record Sharing Feature - Router
#
# Mounted under /records next to the records router; registered first so that
# /records/shared is not captured by /records/{record_id}.

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.database import get_session
from health_records.features.auth.dependencies import get_current_claims
from health_records.features.auth.schemas import TokenClaims
from health_records.features.sharing.schemas import (
    GrantResponse,
    ShareRecordRequest,
    SharedRecordResponse,
)
from health_records.features.sharing.service import SharingService
from health_records.shared.exceptions import BadRequestException
from health_records.shared.schemas import MessageResponse


router = APIRouter(prefix="/records", tags=["Sharing"])


@router.get("/shared", response_model=List[SharedRecordResponse])
async def get_shared_records(
    email: Optional[str] = Query(None, description="Grantee email"),
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """
    Get the records currently shared with an email address.
    
    Expired grants are left out. Each entry carries the record and its
    owner's name and email.
    """
    if not email:
        raise BadRequestException("Email is required")
    
    grants = await SharingService.list_grants_for_grantee(session, email)
    return [SharingService.shared_record_to_response(grant) for grant in grants]


@router.post("/{record_id}/share", response_model=GrantResponse)
async def share_record(
    record_id: str,
    request: ShareRecordRequest,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """
    Share a record with an email address, or replace the existing grant.
    
    - **email**: Grantee email
    - **viewPermission**: Defaults to true
    - **downloadPermission**: Defaults to false
    - **resharePermission**: Defaults to false
    - **expiration**: Absolute instant; omitted means never expires
    """
    grant = await SharingService.share_record(
        session,
        record_id,
        request.email,
        view_permission=request.view_permission,
        download_permission=request.download_permission,
        reshare_permission=request.reshare_permission,
        expiration=request.expiration,
    )
    return SharingService.grant_to_response(grant)


@router.delete("/share/{grant_id}", response_model=MessageResponse)
async def remove_sharing(
    grant_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
):
    """Revoke a grant."""
    await SharingService.revoke_grant(session, grant_id)
    return MessageResponse(message="Sharing removed successfully")
