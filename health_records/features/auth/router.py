from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.database import get_session
from health_records.features.auth.schemas import (
    SignupRequest,
    SigninRequest,
    AuthResponse,
    UserResponse,
)
from health_records.features.auth.service import AuthService
from health_records.features.auth.dependencies import get_current_user
from health_records.features.auth.models import User


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(signup_data: SignupRequest, session: AsyncSession = Depends(get_session)):
    """
    Register a new user.
    
    - **name**: User's full name
    - **email**: User's email address
    - **password**: Password
    """
    user, token = await AuthService.signup(session, signup_data)
    
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.post("/signin", response_model=AuthResponse)
async def signin(signin_data: SigninRequest, session: AsyncSession = Depends(get_session)):
    """
    Authenticate user and return access token.
    
    - **email**: User's email address
    - **password**: User's password
    """
    user, token = await AuthService.signin(session, signin_data)
    
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.get("/me", response_model=UserResponse, response_model_exclude_none=True)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Get current authenticated user's information.
    
    Requires authentication.
    """
    return UserResponse(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        created_at=current_user.created_at,
    )
