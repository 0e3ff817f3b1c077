"""Suggestion Pydantic schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from roomvote.models.base import LABEL_MAX_LENGTH
from roomvote.schemas.room import RoomOut


class SuggestionCreate(BaseModel):
    # Optional here so that missing fields surface as a 400 from the service.
    name: Optional[str] = None
    user_session: Optional[str] = Field(None, alias="userSession", max_length=LABEL_MAX_LENGTH)

    model_config = {"populate_by_name": True}


class SuggestionOut(BaseModel):
    id: str
    room_id: str
    name: str
    created_at: datetime
    created_by: str

    model_config = {"from_attributes": True}


class SuggestionResult(SuggestionOut):
    vote_count: int = 0


class RoomResults(BaseModel):
    """Everything a polling client needs to render a room."""
    room: RoomOut
    suggestions: List[SuggestionResult]
    total_votes: int
    leader_id: Optional[str] = None
    poll_interval_seconds: int
