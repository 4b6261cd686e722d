"""
Event model: a calendar entry with optional mood feedback.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, DateTime, Text, ForeignKey, Boolean, Integer, SmallInteger, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID
import uuid

from aurora.database import Base
from aurora.models.enums import EventPriority

if TYPE_CHECKING:
    from aurora.models.user import User
    from aurora.models.event_category import EventCategory


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint('"end" > start', name="ck_events_end_after_start"),
        CheckConstraint("mood_rating BETWEEN 1 AND 5", name="ck_events_mood_rating_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("event_categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Event details
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_all_day: Mapped[bool] = mapped_column(Boolean, default=False)
    location: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, default=int(EventPriority.MEDIUM))

    # Recurrence
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    recurrence_pattern: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Mood feedback (1-5)
    mood_rating: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    mood_notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="events")
    category: Mapped["EventCategory"] = relationship("EventCategory", back_populates="events", lazy="joined")

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)
