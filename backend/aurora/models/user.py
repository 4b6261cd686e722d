"""
User model. Credentials live with the upstream auth service; this table
only anchors ownership of categories, events and suggestions.
"""
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID
import uuid

from aurora.database import Base

if TYPE_CHECKING:
    from aurora.models.event import Event
    from aurora.models.event_category import EventCategory
    from aurora.models.schedule_suggestion import ScheduleSuggestion


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    timezone: Mapped[str] = mapped_column(String(50), nullable=False, default="America/Argentina/Buenos_Aires")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    events: Mapped[list["Event"]] = relationship(
        "Event", back_populates="user", cascade="all, delete-orphan"
    )
    categories: Mapped[list["EventCategory"]] = relationship(
        "EventCategory", back_populates="user", cascade="all, delete-orphan"
    )
    schedule_suggestions: Mapped[list["ScheduleSuggestion"]] = relationship(
        "ScheduleSuggestion", back_populates="user", cascade="all, delete-orphan"
    )
