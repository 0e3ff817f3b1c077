"""Vote model — one voter's endorsement of one suggestion."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from roomvote.database import Base
from roomvote.models.base import ADDRESS_MAX_LENGTH, ID_MAX_LENGTH, LABEL_MAX_LENGTH, new_id, utcnow


VOTE_UNIQUE_CONSTRAINT = "uq_vote_voter"


class Vote(Base):
    __tablename__ = "votes"
    __table_args__ = (
        # One vote per voter per suggestion; voter_key is the address or the
        # session token depending on VOTER_IDENTITY.
        UniqueConstraint("room_id", "suggestion_id", "voter_key", name=VOTE_UNIQUE_CONSTRAINT),
    )

    id: Mapped[str] = mapped_column(String(ID_MAX_LENGTH), primary_key=True, default=new_id)
    room_id: Mapped[str] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    suggestion_id: Mapped[str] = mapped_column(
        ForeignKey("suggestions.id", ondelete="CASCADE"), nullable=False
    )
    user_session: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH), nullable=False)
    user_ip: Mapped[str] = mapped_column(String(ADDRESS_MAX_LENGTH), nullable=False)
    user_name: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH), nullable=False)
    voter_key: Mapped[str] = mapped_column(String(LABEL_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
