"""
Rooms router — create, look up, lock/unlock, reset and read results.

Endpoints:
    POST /rooms                    → create a room (code generated if omitted)
    GET  /rooms?roomId=X           → fetch a room
    GET  /rooms/{room_id}          → fetch a room (path form)
    POST /rooms/{room_id}/lock     → set the lock flag
    POST /rooms/{room_id}/reset    → clear suggestions and votes
    GET  /rooms/{room_id}/results  → suggestions with counts and the leader
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roomvote.config import Settings
from roomvote.database import get_db
from roomvote.dependencies import get_settings
from roomvote.schemas.room import LockUpdate, RoomCreate, RoomOut
from roomvote.schemas.suggestion import RoomResults
from roomvote.services import rooms as room_service

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post("")
async def create_room(
    body: Optional[RoomCreate] = None,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    body = body or RoomCreate()
    room = await room_service.create_room(
        db,
        room_id=body.room_id,
        created_by=body.created_by,
        code_length=settings.ROOM_CODE_LENGTH,
        default_creator=settings.DEFAULT_ROOM_CREATOR,
    )
    return {"data": RoomOut.model_validate(room)}


@router.get("")
async def get_room_by_query(
    room_id: Optional[str] = Query(None, alias="roomId"),
    db: AsyncSession = Depends(get_db),
):
    room = await room_service.get_room(db, room_id)
    return {"data": RoomOut.model_validate(room)}


@router.get("/{room_id}")
async def get_room(room_id: str, db: AsyncSession = Depends(get_db)):
    room = await room_service.get_room(db, room_id)
    return {"data": RoomOut.model_validate(room)}


@router.post("/{room_id}/lock")
async def set_lock(room_id: str, body: LockUpdate, db: AsyncSession = Depends(get_db)):
    room = await room_service.set_lock(db, room_id, body.is_locked)
    return {"data": RoomOut.model_validate(room)}


@router.post("/{room_id}/reset")
async def reset_room(room_id: str, db: AsyncSession = Depends(get_db)):
    await room_service.reset_room(db, room_id)
    return {"success": True}


@router.get("/{room_id}/results")
async def get_results(
    room_id: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    results = await room_service.room_results(db, room_id)
    return {
        "data": RoomResults(
            room=RoomOut.model_validate(results["room"]),
            suggestions=results["suggestions"],
            total_votes=results["total_votes"],
            leader_id=results["leader_id"],
            poll_interval_seconds=settings.POLL_INTERVAL_SECONDS,
        )
    }
