"""
Votes router — tally, cast and retract.

Clients toggle a vote by casting; on a 409 they send the DELETE to
take it back.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomvote.config import Settings
from roomvote.database import get_db
from roomvote.dependencies import get_client_address, get_settings
from roomvote.schemas.vote import VoteCreate, VoteDelete, VoteOut
from roomvote.services import rooms as room_service

router = APIRouter(prefix="/rooms", tags=["votes"])


@router.get("/{room_id}/votes")
async def get_tally(room_id: str, db: AsyncSession = Depends(get_db)):
    """Vote count per suggestion id; suggestions without votes are absent."""
    return {"data": await room_service.tally(db, room_id)}


@router.post("/{room_id}/votes")
async def cast_vote(
    room_id: str,
    body: VoteCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    address: str = Depends(get_client_address),
):
    vote = await room_service.cast_vote(
        db,
        room_id,
        suggestion_id=body.suggestion_id,
        user_session=body.user_session,
        user_ip=address,
        user_name=body.user_name,
        identity=settings.VOTER_IDENTITY,
        default_name=settings.DEFAULT_VOTER_NAME,
    )
    return {"data": VoteOut.model_validate(vote)}


@router.delete("/{room_id}/votes")
async def retract_vote(
    room_id: str,
    body: VoteDelete,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    address: str = Depends(get_client_address),
):
    await room_service.retract_vote(
        db,
        room_id,
        suggestion_id=body.suggestion_id,
        user_session=body.user_session,
        user_ip=address,
        identity=settings.VOTER_IDENTITY,
    )
    return {"success": True}
