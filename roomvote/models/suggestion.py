"""Suggestion model — a candidate name proposed inside a room."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from roomvote.database import Base
from roomvote.models.base import ID_MAX_LENGTH, LABEL_MAX_LENGTH, new_id, utcnow


class Suggestion(Base):
    __tablename__ = "suggestions"

    id: Mapped[str] = mapped_column(String(ID_MAX_LENGTH), primary_key=True, default=new_id)
    room_id: Mapped[str] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Microsecond precision keeps the display order stable.
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    created_by: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH), nullable=False)
