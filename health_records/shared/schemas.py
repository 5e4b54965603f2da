from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # Stored datetimes are naive UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Datetime rendered in JSON with an explicit UTC designator
UtcDateTime = Annotated[datetime, PlainSerializer(_as_utc, return_type=datetime, when_used="json")]


class CamelModel(BaseModel):
    """Base schema whose JSON keys are camelCase (``patientId``, ``createdAt``)."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Confirmation message response."""
    
    message: str


class ErrorResponse(BaseModel):
    """Error response model."""
    
    detail: str
