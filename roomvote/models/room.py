"""Room model — a voting session addressed by a short human-typed code."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from roomvote.database import Base
from roomvote.models.base import LABEL_MAX_LENGTH, ROOM_ID_MAX_LENGTH, utcnow


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(ROOM_ID_MAX_LENGTH), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    is_locked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH), nullable=False)
