"""Seed a demo room with a few suggestions and votes.

Usage:
    python seed_demo_room.py [ROOM_CODE]
"""

import asyncio
import sys

from roomvote.config import settings
from roomvote.database import build_engine, build_session_factory, create_tables
from roomvote.errors import Conflict
from roomvote.services import rooms as room_service

SUGGESTIONS = ["Eagle", "Falcon", "Osprey"]
# (suggestion index, voter address)
VOTES = [(0, "10.0.0.1"), (0, "10.0.0.2"), (1, "10.0.0.3"), (2, "10.0.0.1"), (0, "10.0.0.4")]


async def async_main(room_code: str):
    engine = build_engine(settings)
    await create_tables(engine)
    async_session = build_session_factory(engine)

    async with async_session() as session:
        try:
            room = await room_service.create_room(session, room_code)
        except Conflict:
            print(f"Room {room_code} already exists, resetting it")
            room = await room_service.get_room(session, room_code)
            await room_service.reset_room(session, room.id)

        created = []
        for name in SUGGESTIONS:
            created.append(await room_service.add_suggestion(session, room.id, name, "seed-session"))

        for index, address in VOTES:
            await room_service.cast_vote(
                session,
                room.id,
                created[index].id,
                user_session=f"seed-{address}",
                user_ip=address,
                identity=settings.VOTER_IDENTITY,
            )

        results = await room_service.room_results(session, room.id)

    await engine.dispose()

    print(f"Room {room.id}: {results['total_votes']} votes")
    for s in results["suggestions"]:
        marker = " (leader)" if s["id"] == results["leader_id"] else ""
        print(f"  {s['name']}: {s['vote_count']}{marker}")


if __name__ == "__main__":
    asyncio.run(async_main(sys.argv[1] if len(sys.argv) > 1 else "DEMO01"))
