"""Suggestions router — list and submit suggestions for a room."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomvote.config import Settings
from roomvote.database import get_db
from roomvote.dependencies import get_settings
from roomvote.schemas.suggestion import SuggestionCreate, SuggestionOut
from roomvote.services import rooms as room_service

router = APIRouter(prefix="/rooms", tags=["suggestions"])


@router.get("/{room_id}/suggestions")
async def list_suggestions(room_id: str, db: AsyncSession = Depends(get_db)):
    """All suggestions of the room, oldest first."""
    suggestions = await room_service.list_suggestions(db, room_id)
    return {"data": [SuggestionOut.model_validate(s) for s in suggestions]}


@router.post("/{room_id}/suggestions")
async def add_suggestion(
    room_id: str,
    body: SuggestionCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    suggestion = await room_service.add_suggestion(
        db,
        room_id,
        name=body.name,
        user_session=body.user_session,
        max_length=settings.SUGGESTION_NAME_MAX_LENGTH,
    )
    return {"data": SuggestionOut.model_validate(suggestion)}
