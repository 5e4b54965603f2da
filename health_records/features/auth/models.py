from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from health_records.shared.models import Base, IdMixin, TimestampMixin


class User(Base, IdMixin, TimestampMixin):
    """Account that signs in to the application."""
    
    __tablename__ = "users"
    
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    
    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
