"""Vote Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from roomvote.models.base import ID_MAX_LENGTH, LABEL_MAX_LENGTH


class VoteCreate(BaseModel):
    suggestion_id: Optional[str] = Field(None, alias="suggestionId", max_length=ID_MAX_LENGTH)
    user_session: Optional[str] = Field(None, alias="userSession", max_length=LABEL_MAX_LENGTH)
    user_name: Optional[str] = Field(None, alias="userName", max_length=LABEL_MAX_LENGTH)

    model_config = {"populate_by_name": True}


class VoteDelete(BaseModel):
    suggestion_id: Optional[str] = Field(None, alias="suggestionId", max_length=ID_MAX_LENGTH)
    user_session: Optional[str] = Field(None, alias="userSession", max_length=LABEL_MAX_LENGTH)

    model_config = {"populate_by_name": True}


class VoteOut(BaseModel):
    id: str
    room_id: str
    suggestion_id: str
    user_session: str
    user_ip: str
    user_name: str
    created_at: datetime

    model_config = {"from_attributes": True}
