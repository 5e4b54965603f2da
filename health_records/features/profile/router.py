# Profile Feature - Router

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.database import get_session
from health_records.features.auth.dependencies import get_current_user
from health_records.features.auth.models import User
from health_records.features.auth.schemas import UserResponse
from health_records.features.auth.service import AuthService
from health_records.features.profile.schemas import ChangePasswordRequest, UpdateProfileRequest
from health_records.shared.schemas import MessageResponse


router = APIRouter(prefix="/profile", tags=["Profile"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.get("", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get the signed-in user's profile."""
    return _user_to_response(current_user)


@router.put("", response_model=UserResponse)
async def update_profile(
    update_data: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """
    Update the signed-in user's name and/or email.
    
    - **name**: New name (optional)
    - **email**: New email, must not belong to another account (optional)
    """
    updated_user = await AuthService.update_profile(
        session, current_user, update_data.model_dump(exclude_unset=True)
    )
    return _user_to_response(updated_user)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """
    Change the signed-in user's password.
    
    - **currentPassword**: Current password
    - **newPassword**: New password
    """
    await AuthService.change_password(
        session,
        current_user,
        request.current_password,
        request.new_password,
    )
    return MessageResponse(message="Password updated successfully")


@router.delete("", response_model=MessageResponse)
async def delete_account(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """Delete the signed-in user's account."""
    await AuthService.delete_account(session, current_user)
    return MessageResponse(message="Account deleted successfully")
