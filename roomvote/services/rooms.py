"""Room service — room, suggestion and vote operations against the store.

Every function takes the request's ``AsyncSession`` and raises the
errors from ``roomvote.errors``; routers only translate bodies and
wrap results.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomvote.errors import Conflict, DuplicateVote, InternalError, Locked, NotFound, ValidationError
from roomvote.models.base import LABEL_MAX_LENGTH, ROOM_ID_MAX_LENGTH
from roomvote.models.room import Room
from roomvote.models.suggestion import Suggestion
from roomvote.models.vote import VOTE_UNIQUE_CONSTRAINT, Vote
from roomvote.services.voting import (
    clean_suggestion_name,
    count_votes,
    find_leader,
    generate_room_id,
    normalize_room_id,
    voter_key,
)

logger = logging.getLogger(__name__)

# Attempts at finding a free generated room code before giving up.
ROOM_CODE_ATTEMPTS = 5


# ═══════════════════════════════════════════════════════════════
#  Rooms
# ═══════════════════════════════════════════════════════════════

async def _find_room(db: AsyncSession, room_id: Optional[str]) -> Optional[Room]:
    code = normalize_room_id(room_id)
    if code is None:
        return None
    result = await db.execute(select(Room).where(Room.id == code))
    return result.scalar_one_or_none()


async def _insert_room(db: AsyncSession, code: str, created_by: str) -> Optional[Room]:
    """Insert a room, returning None if the code is already taken."""
    if await _find_room(db, code) is not None:
        return None
    room = Room(id=code, created_by=created_by, is_locked=False)
    db.add(room)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with another creator of the same code.
        await db.rollback()
        return None
    await db.refresh(room)
    return room


async def create_room(
    db: AsyncSession,
    room_id: Optional[str] = None,
    created_by: Optional[str] = None,
    code_length: int = 6,
    default_creator: str = "anonymous",
) -> Room:
    """Create an unlocked room.

    With no ``room_id`` a random code is generated; an explicit id that
    is already taken raises ``Conflict``.
    """
    creator = (created_by or "").strip()[:LABEL_MAX_LENGTH] or default_creator

    if room_id is not None:
        code = normalize_room_id(room_id)
        if code is None:
            raise ValidationError("Room ID is required")
        if len(code) > ROOM_ID_MAX_LENGTH:
            raise ValidationError(f"Room ID must be at most {ROOM_ID_MAX_LENGTH} characters")
        room = await _insert_room(db, code, creator)
        if room is None:
            raise Conflict(f"Room {code} already exists")
    else:
        room = None
        for _ in range(ROOM_CODE_ATTEMPTS):
            room = await _insert_room(db, generate_room_id(code_length), creator)
            if room is not None:
                break
        if room is None:
            raise InternalError("Could not allocate a room code")

    logger.info(f"Created room {room.id}")
    return room


async def get_room(db: AsyncSession, room_id: Optional[str]) -> Room:
    if normalize_room_id(room_id) is None:
        raise ValidationError("Room ID is required")
    room = await _find_room(db, room_id)
    if room is None:
        raise NotFound("Room not found")
    return room


async def set_lock(db: AsyncSession, room_id: str, locked: bool) -> Room:
    """Set the lock flag. Anyone holding the room code may do this."""
    room = await get_room(db, room_id)
    room.is_locked = locked
    await db.commit()
    await db.refresh(room)
    logger.info(f"Room {room.id} {'locked' if locked else 'unlocked'}")
    return room


async def reset_room(db: AsyncSession, room_id: str) -> None:
    """Delete every vote and suggestion of the room in one transaction.

    The room itself survives, with its lock state untouched.
    """
    room = await get_room(db, room_id)
    try:
        votes_deleted = await db.execute(delete(Vote).where(Vote.room_id == room.id))
        suggestions_deleted = await db.execute(
            delete(Suggestion).where(Suggestion.room_id == room.id)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info(
        f"Reset room {room.id}: removed {suggestions_deleted.rowcount} suggestions "
        f"and {votes_deleted.rowcount} votes"
    )


# ═══════════════════════════════════════════════════════════════
#  Suggestions
# ═══════════════════════════════════════════════════════════════

def _clean_session(user_session: Optional[str]) -> str:
    session = (user_session or "").strip()
    if len(session) > LABEL_MAX_LENGTH:
        raise ValidationError(f"User session must be at most {LABEL_MAX_LENGTH} characters")
    return session


async def add_suggestion(
    db: AsyncSession,
    room_id: str,
    name: Optional[str],
    user_session: Optional[str],
    max_length: int = 50,
) -> Suggestion:
    """Add a suggestion to an unlocked room. Duplicate names are allowed."""
    text = clean_suggestion_name(name, max_length)
    session = _clean_session(user_session)
    if not session:
        raise ValidationError("User session is required")

    room = await get_room(db, room_id)
    if room.is_locked:
        raise Locked("Room is locked")

    suggestion = Suggestion(room_id=room.id, name=text, created_by=session)
    db.add(suggestion)
    await db.commit()
    await db.refresh(suggestion)
    logger.info(f"Room {room.id}: new suggestion {suggestion.id} ({text!r})")
    return suggestion


async def list_suggestions(db: AsyncSession, room_id: str) -> List[Suggestion]:
    """Suggestions of the room, oldest first. Unknown rooms have none."""
    code = normalize_room_id(room_id)
    result = await db.execute(
        select(Suggestion)
        .where(Suggestion.room_id == code)
        .order_by(Suggestion.created_at.asc(), Suggestion.id.asc())
    )
    return list(result.scalars().all())


# ═══════════════════════════════════════════════════════════════
#  Votes
# ═══════════════════════════════════════════════════════════════

def _is_duplicate_vote(exc: IntegrityError) -> bool:
    """True when the violated constraint is the one-vote-per-voter rule.

    PostgreSQL names the constraint; SQLite lists its columns instead.
    """
    message = str(exc.orig)
    return VOTE_UNIQUE_CONSTRAINT in message or "votes.voter_key" in message


async def _find_vote(db: AsyncSession, room_id: str, suggestion_id: str, key: str) -> Optional[Vote]:
    result = await db.execute(
        select(Vote).where(
            Vote.room_id == room_id,
            Vote.suggestion_id == suggestion_id,
            Vote.voter_key == key,
        )
    )
    return result.scalars().first()


async def cast_vote(
    db: AsyncSession,
    room_id: str,
    suggestion_id: Optional[str],
    user_session: Optional[str],
    user_ip: str,
    user_name: Optional[str] = None,
    identity: str = "address",
    default_name: str = "Anonymous",
) -> Vote:
    """Record one vote; a second vote by the same voter raises ``DuplicateVote``.

    Locked rooms still accept votes. The pre-check gives the usual
    answer; the unique constraint catches two casts racing past it.
    """
    session = _clean_session(user_session)
    if not suggestion_id or not session:
        raise ValidationError("Suggestion ID and user session are required")

    code = normalize_room_id(room_id)
    result = await db.execute(
        select(Suggestion).where(Suggestion.id == suggestion_id, Suggestion.room_id == code)
    )
    suggestion = result.scalar_one_or_none()
    if suggestion is None:
        raise NotFound("Suggestion not found")

    key = voter_key(identity, user_ip, session)
    if await _find_vote(db, code, suggestion_id, key) is not None:
        logger.info(f"Room {code}: duplicate vote on {suggestion_id} rejected")
        raise DuplicateVote()

    vote = Vote(
        room_id=code,
        suggestion_id=suggestion_id,
        user_session=session,
        user_ip=user_ip,
        user_name=(user_name or "").strip()[:LABEL_MAX_LENGTH] or default_name,
        voter_key=key,
    )
    db.add(vote)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if _is_duplicate_vote(exc):
            logger.info(f"Room {code}: concurrent duplicate vote on {suggestion_id} rejected")
            raise DuplicateVote()
        # The suggestion went away (e.g. a reset) after it was looked up.
        logger.info(f"Room {code}: suggestion {suggestion_id} vanished before the vote landed")
        raise NotFound("Suggestion not found")
    await db.refresh(vote)
    logger.info(f"Room {code}: vote {vote.id} on {suggestion_id}")
    return vote


async def retract_vote(
    db: AsyncSession,
    room_id: str,
    suggestion_id: Optional[str],
    user_session: Optional[str],
    user_ip: str,
    identity: str = "address",
) -> int:
    """Remove the caller's vote. Succeeds whether or not one existed.

    Returns the number of rows removed.
    """
    session = _clean_session(user_session)
    if not suggestion_id or not session:
        raise ValidationError("Suggestion ID and user session are required")

    code = normalize_room_id(room_id)
    key = voter_key(identity, user_ip, session)
    result = await db.execute(
        delete(Vote).where(
            Vote.room_id == code,
            Vote.suggestion_id == suggestion_id,
            Vote.voter_key == key,
        )
    )
    await db.commit()
    if result.rowcount:
        logger.info(f"Room {code}: vote on {suggestion_id} retracted")
    return result.rowcount


async def tally(db: AsyncSession, room_id: str) -> Dict[str, int]:
    """Count votes per suggestion, recomputed from the vote rows."""
    code = normalize_room_id(room_id)
    result = await db.execute(select(Vote.suggestion_id).where(Vote.room_id == code))
    return count_votes(result.scalars().all())


async def room_results(db: AsyncSession, room_id: str) -> dict:
    """Room, suggestions with their counts, total votes and the leader."""
    room = await get_room(db, room_id)
    suggestions = await list_suggestions(db, room.id)
    counts = await tally(db, room.id)
    return {
        "room": room,
        "suggestions": [
            {
                "id": s.id,
                "room_id": s.room_id,
                "name": s.name,
                "created_at": s.created_at,
                "created_by": s.created_by,
                "vote_count": counts.get(s.id, 0),
            }
            for s in suggestions
        ],
        "total_votes": sum(counts.values()),
        "leader_id": find_leader(counts, [s.id for s in suggestions]),
    }
