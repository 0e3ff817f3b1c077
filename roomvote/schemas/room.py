"""Room Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from roomvote.models.base import LABEL_MAX_LENGTH, ROOM_ID_MAX_LENGTH


class RoomCreate(BaseModel):
    """Body of ``POST /rooms``; the id is generated when omitted."""
    room_id: Optional[str] = Field(None, alias="roomId", max_length=ROOM_ID_MAX_LENGTH)
    created_by: Optional[str] = Field(None, alias="createdBy", max_length=LABEL_MAX_LENGTH)

    model_config = {"populate_by_name": True}


class LockUpdate(BaseModel):
    is_locked: bool = Field(alias="isLocked")

    model_config = {"populate_by_name": True}


class RoomOut(BaseModel):
    id: str
    created_at: datetime
    is_locked: bool
    created_by: str

    model_config = {"from_attributes": True}
