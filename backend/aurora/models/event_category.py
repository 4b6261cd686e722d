"""
EventCategory model. A category with no owner, or flagged as system default,
is shared by every user.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, DateTime, Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID
import uuid

from aurora.database import Base

if TYPE_CHECKING:
    from aurora.models.user import User
    from aurora.models.event import Event


class EventCategory(Base):
    __tablename__ = "event_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    # NULL owner means system-wide
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#2b7fff")
    icon: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_system_default: Mapped[bool] = mapped_column(Boolean, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    user: Mapped[Optional["User"]] = relationship("User", back_populates="categories")
    events: Mapped[list["Event"]] = relationship("Event", back_populates="category")

    @property
    def is_system_category(self) -> bool:
        return self.user_id is None or bool(self.is_system_default)

    def is_available_for(self, user_id: uuid.UUID) -> bool:
        """Active, and either shared system-wide or owned by the user."""
        if not self.is_active:
            return False
        if self.is_system_default:
            return True
        return self.user_id == user_id
