# Record Sharing Feature - Models

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from health_records.shared.models import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from health_records.features.records.models import HealthRecord


class SharedAccess(Base, IdMixin, TimestampMixin):
    """
    Grant of access to one health record for one email address.
    
    The three permissions are independent of each other. A grant without an
    expiration never expires; expired grants are filtered out on read, not
    deleted.
    """
    
    __tablename__ = "shared_access"
    __table_args__ = (
        UniqueConstraint("email", "health_record_id", name="uq_shared_access_email_record"),
    )
    
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    health_record_id: Mapped[str] = mapped_column(
        ForeignKey("health_records.id"), index=True, nullable=False
    )
    
    view_permission: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    download_permission: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    reshare_permission: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    expiration: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    
    health_record: Mapped["HealthRecord"] = relationship(back_populates="shared_with")
    
    def __repr__(self) -> str:
        return f"<SharedAccess(email={self.email}, health_record_id={self.health_record_id})>"
