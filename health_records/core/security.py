from datetime import timedelta
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from health_records.config import settings
from health_records.shared.utils import utcnow


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Base class for bearer token failures."""


class MissingTokenError(TokenError):
    """No bearer token was sent."""


class InvalidTokenError(TokenError):
    """Token is malformed or its signature does not verify."""


class ExpiredTokenError(TokenError):
    """Token is well formed but past its expiration."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token carrying ``data`` plus ``iat`` and ``exp``."""
    to_encode = data.copy()
    issued_at = utcnow()
    
    if expires_delta is not None:
        expire = issued_at + expires_delta
    else:
        expire = issued_at + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    
    to_encode.update({"iat": issued_at, "exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    
    return encoded_jwt


def decode_token(token: Optional[str]) -> dict:
    """
    Decode and verify a JWT token.
    
    Raises:
        MissingTokenError: token is empty or absent
        ExpiredTokenError: signature is valid but the token has expired
        InvalidTokenError: anything else that fails verification
    """
    if not token:
        raise MissingTokenError("No token provided")
    
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise ExpiredTokenError("Token expired") from e
    except JWTError as e:
        raise InvalidTokenError("Invalid token") from e
