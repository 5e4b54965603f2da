from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from health_records.database import get_session
from health_records.features.auth.models import User
from health_records.features.auth.schemas import TokenClaims
from health_records.features.auth.service import AuthService
from health_records.core.security import TokenError
from health_records.core.logging import get_logger
from health_records.shared.exceptions import CredentialsException


logger = get_logger(__name__)


# HTTP Bearer security scheme; missing headers are reported by get_current_claims
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenClaims:
    """
    Dependency to validate the bearer token and return its claims.
    
    Missing, invalid and expired tokens each get their own message but all
    answer 401.
    """
    token = credentials.credentials if credentials else None
    
    try:
        return AuthService.verify_token(token)
    except TokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise CredentialsException(f"Authentication failed: {e}")
    except ValueError:
        # Signature checked out but the claims are not ours
        logger.warning("Rejected bearer token: missing identity claims")
        raise CredentialsException("Authentication failed: Invalid token")


async def get_current_user(
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Dependency to load the user named by the token.
    
    Raises:
        NotFoundException: If the account no longer exists
    """
    return await AuthService.get_user_by_id(session, claims.id)
