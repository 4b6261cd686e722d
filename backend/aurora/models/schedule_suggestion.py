"""
ScheduleSuggestion model: a proposed calendar change awaiting user response.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, DateTime, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID, JSONB
import uuid

from aurora.database import Base
from aurora.models.enums import SuggestionStatus, SuggestionType

if TYPE_CHECKING:
    from aurora.models.user import User
    from aurora.models.event import Event


class ScheduleSuggestion(Base):
    __tablename__ = "schedule_suggestions"

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
    # Suggestions outlive the event they reference
    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )

    type: Mapped[SuggestionType] = mapped_column(
        SAEnum(SuggestionType, name="suggestion_type", native_enum=False, length=40),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    reason: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    priority: Mapped[int] = mapped_column(Integer, default=3)
    confidence_score: Mapped[int] = mapped_column(Integer, default=70)
    suggested_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    status: Mapped[SuggestionStatus] = mapped_column(
        SAEnum(SuggestionStatus, name="suggestion_status", native_enum=False, length=20),
        nullable=False,
        default=SuggestionStatus.PENDING,
        index=True,
    )
    responded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    extra: Mapped[Optional[dict]] = mapped_column("metadata", JSONB, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="schedule_suggestions")
    event: Mapped[Optional["Event"]] = relationship("Event", lazy="joined")
