# Profile Feature - Schemas

from typing import Optional
from pydantic import EmailStr, Field, field_validator
from health_records.shared.schemas import CamelModel


class UpdateProfileRequest(CamelModel):
    """Request schema for updating the signed-in user's profile."""
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    
    @field_validator("name", "email", mode="before")
    @classmethod
    def blank_as_unset(cls, v):
        # Empty strings keep the current value
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ChangePasswordRequest(CamelModel):
    """Request schema for changing the signed-in user's password."""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=100)
