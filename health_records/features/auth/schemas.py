from pydantic import EmailStr, Field
from typing import Optional
from health_records.shared.schemas import CamelModel, UtcDateTime


# Request Schemas
class SignupRequest(CamelModel):
    """Signup request schema."""
    
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=100)


class SigninRequest(CamelModel):
    """Signin request schema."""
    
    email: EmailStr
    password: str = Field(..., min_length=1)


# Response Schemas
class AuthResponse(CamelModel):
    """Identity plus bearer token returned by signup and signin."""
    
    id: str
    name: str
    email: str
    token: str


class UserResponse(CamelModel):
    """User response schema."""
    
    id: str
    name: str
    email: str
    created_at: UtcDateTime
    updated_at: Optional[UtcDateTime] = None


class TokenClaims(CamelModel):
    """Identity fields carried by a bearer token."""
    
    id: str
    email: str
    name: str
    iat: Optional[int] = None
    exp: Optional[int] = None
