from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.features.auth.models import User
from health_records.features.auth.schemas import SignupRequest, SigninRequest, TokenClaims
from health_records.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_token,
)
from health_records.shared.exceptions import (
    BadRequestException,
    NotFoundException,
    CredentialsException,
    ConflictException,
)
from health_records.shared.utils import normalize_email
from health_records.core.logging import get_logger


logger = get_logger(__name__)


class AuthService:
    """Authentication service: identity store and token issuance."""
    
    @staticmethod
    def issue_token(user: User) -> str:
        """Create a bearer token carrying the user's id, email and name."""
        return create_access_token(data={"id": user.id, "email": user.email, "name": user.name})
    
    @staticmethod
    def verify_token(token: Optional[str]) -> TokenClaims:
        """
        Validate a bearer token and return its claims.
        
        Raises the ``TokenError`` subclass describing the failure.
        """
        payload = decode_token(token)
        return TokenClaims.model_validate(payload)
    
    @staticmethod
    async def signup(session: AsyncSession, signup_data: SignupRequest) -> tuple[User, str]:
        """
        Register a new user.
        
        Returns:
            tuple: (user, access_token)
        """
        email = normalize_email(signup_data.email)
        
        # Check if user already exists
        existing_user = await AuthService.get_user_by_email(session, email)
        if existing_user:
            raise ConflictException("User already exists")
        
        user = User(
            name=signup_data.name,
            email=email,
            password_hash=get_password_hash(signup_data.password),
        )
        session.add(user)
        try:
            await session.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            await session.rollback()
            raise ConflictException("User already exists")
        
        logger.info(f"Created account {user.id} for {user.email}")
        
        return user, AuthService.issue_token(user)
    
    @staticmethod
    async def signin(session: AsyncSession, signin_data: SigninRequest) -> tuple[User, str]:
        """
        Authenticate user and return access token.
        
        Returns:
            tuple: (user, access_token)
        """
        user = await AuthService.get_user_by_email(session, signin_data.email)
        if not user:
            raise CredentialsException("Invalid credentials")
        
        if not verify_password(signin_data.password, user.password_hash):
            raise CredentialsException("Invalid credentials")
        
        return user, AuthService.issue_token(user)
    
    @staticmethod
    async def change_password(
        session: AsyncSession, user: User, current_password: str, new_password: str
    ) -> bool:
        """
        Change user password after re-validating the current one.
        
        The stored hash is left untouched when validation fails.
        """
        if not verify_password(current_password, user.password_hash):
            raise BadRequestException("Current password is incorrect")
        
        user.password_hash = get_password_hash(new_password)
        user.update_timestamp()
        await session.commit()
        
        logger.info(f"Password changed for user {user.id}")
        return True
    
    @staticmethod
    async def update_profile(session: AsyncSession, user: User, update_data: dict) -> User:
        """
        Update user profile information.
        
        Args:
            user: User row to update
            update_data: Dictionary with fields to update (name, email)
        
        Empty values keep the prior value.
        """
        email = update_data.get("email")
        if email:
            email = normalize_email(email)
            existing_user = await AuthService.get_user_by_email(session, email)
            if existing_user and existing_user.id != user.id:
                raise BadRequestException("Email is already in use")
            user.email = email
        
        if update_data.get("name"):
            user.name = update_data["name"]
        
        user.update_timestamp()
        await session.commit()
        return user
    
    @staticmethod
    async def delete_account(session: AsyncSession, user: User) -> bool:
        """Delete the user's account."""
        await session.delete(user)
        await session.commit()
        
        logger.info(f"Deleted account {user.id}")
        return True
    
    @staticmethod
    async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
        """Get user by email."""
        result = await session.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()
    
    @staticmethod
    async def get_user_by_id(session: AsyncSession, user_id: str) -> User:
        """Get user by ID."""
        user = await session.get(User, user_id)
        if user is None:
            raise NotFoundException("User not found")
        return user
