from roomvote.database import get_db
from sqlalchemy.exc import OperationalError


def test_create_room_starts_unlocked(client):
    resp = client.post("/rooms", json={"roomId": "AB12CD"})
    assert resp.status_code == 200
    room = resp.json()["data"]
    assert room["id"] == "AB12CD"
    assert room["is_locked"] is False
    assert room["created_by"] == "anonymous"
    assert room["created_at"]


def test_create_room_normalizes_code(client):
    room = client.post("/rooms", json={"roomId": " ab12cd "}).json()["data"]
    assert room["id"] == "AB12CD"
    assert client.get("/rooms", params={"roomId": "ab12cd"}).json()["data"]["id"] == "AB12CD"


def test_create_room_generates_code(client):
    room = client.post("/rooms", json={}).json()["data"]
    assert len(room["id"]) == 6
    assert room["id"] == room["id"].upper()
    assert client.get(f"/rooms/{room['id']}").status_code == 200


def test_create_room_conflict(client):
    client.post("/rooms", json={"roomId": "AB12CD"})
    resp = client.post("/rooms", json={"roomId": "AB12CD"})
    assert resp.status_code == 409
    assert "already exists" in resp.json()["error"]


def test_create_room_blank_code(client):
    assert client.post("/rooms", json={"roomId": "  "}).status_code == 400


def test_get_room(client):
    client.post("/rooms", json={"roomId": "AB12CD", "createdBy": "host"})
    room = client.get("/rooms", params={"roomId": "AB12CD"}).json()["data"]
    assert room["created_by"] == "host"
    assert client.get("/rooms/AB12CD").json()["data"] == room


def test_get_room_not_found(client):
    resp = client.get("/rooms", params={"roomId": "NOPE00"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Room not found"}


def test_get_room_requires_id(client):
    assert client.get("/rooms").status_code == 400


def test_lock_toggle_round_trip(room):
    assert room.lock(True).json()["data"]["is_locked"] is True
    # Setting the same value again is fine.
    assert room.lock(True).json()["data"]["is_locked"] is True
    assert room.lock(False).json()["data"]["is_locked"] is False
    assert room.client.get("/rooms/AB12CD").json()["data"]["is_locked"] is False


def test_lock_unknown_room(client):
    resp = client.post("/rooms/NOPE00/lock", json={"isLocked": True})
    assert resp.status_code == 404


def test_lock_requires_flag(room):
    resp = room.client.post("/rooms/AB12CD/lock", json={})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_reset_clears_children_but_keeps_room(room):
    ids = [room.suggest(name).json()["data"]["id"] for name in ("Eagle", "Falcon", "Osprey")]
    room.vote(ids[0], ip="1.1.1.1")
    room.vote(ids[0], ip="2.2.2.2")
    room.vote(ids[1], ip="1.1.1.1")
    room.vote(ids[2], ip="3.3.3.3")
    room.vote(ids[2], ip="4.4.4.4")
    assert sum(room.tally().values()) == 5
    room.lock(True)

    resp = room.client.post("/rooms/AB12CD/reset")
    assert resp.json() == {"success": True}

    assert room.client.get("/rooms/AB12CD/suggestions").json()["data"] == []
    assert room.tally() == {}
    fetched = room.client.get("/rooms/AB12CD")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["is_locked"] is True

    # Repeating it is harmless.
    assert room.client.post("/rooms/AB12CD/reset").status_code == 200


def test_reset_unknown_room(client):
    assert client.post("/rooms/NOPE00/reset").status_code == 404


def test_results_view(room):
    eagle = room.suggest("Eagle").json()["data"]["id"]
    falcon = room.suggest("Falcon").json()["data"]["id"]
    room.suggest("Osprey")
    room.vote(falcon, ip="1.1.1.1")
    room.vote(falcon, ip="2.2.2.2")
    room.vote(eagle, ip="1.1.1.1")

    data = room.client.get("/rooms/AB12CD/results").json()["data"]
    assert data["room"]["id"] == "AB12CD"
    assert [s["name"] for s in data["suggestions"]] == ["Eagle", "Falcon", "Osprey"]
    assert [s["vote_count"] for s in data["suggestions"]] == [1, 2, 0]
    assert data["total_votes"] == 3
    assert data["leader_id"] == falcon
    assert data["poll_interval_seconds"] == 10


def test_results_tie_goes_to_earliest(room):
    eagle = room.suggest("Eagle").json()["data"]["id"]
    falcon = room.suggest("Falcon").json()["data"]["id"]
    room.vote(falcon, ip="1.1.1.1")
    room.vote(eagle, ip="2.2.2.2")
    assert room.client.get("/rooms/AB12CD/results").json()["data"]["leader_id"] == eagle


def test_results_no_leader_without_votes(room):
    room.suggest("Eagle")
    data = room.client.get("/rooms/AB12CD/results").json()["data"]
    assert data["leader_id"] is None
    assert data["total_votes"] == 0


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class _BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is unavailable"))


def test_store_failure_is_internal_error(client):
    async def broken_db():
        yield _BrokenSession()

    client.app.dependency_overrides[get_db] = broken_db
    try:
        resp = client.get("/rooms/AB12CD")
    finally:
        client.app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_create_room_rejects_oversized_fields(client):
    resp = client.post("/rooms", json={"roomId": "A" * 200})
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert client.post("/rooms", json={"roomId": "AB12CD", "createdBy": "x" * 101}).status_code == 400
    assert client.get("/rooms/AB12CD").status_code == 404
