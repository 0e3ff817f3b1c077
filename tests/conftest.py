import pytest
from fastapi.testclient import TestClient

from roomvote.config import Settings
from roomvote.database import build_engine, build_session_factory, create_tables
from roomvote.main import create_app


def make_settings(tmp_path, **overrides) -> Settings:
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", **overrides)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def client(tmp_path):
    app = create_app(make_settings(tmp_path))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_client(tmp_path):
    """Client for an app that keys votes on the session token."""
    app = create_app(make_settings(tmp_path, VOTER_IDENTITY="session"))
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def engine(tmp_path, anyio_backend):
    engine = build_engine(make_settings(tmp_path))
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine, anyio_backend):
    async with build_session_factory(engine)() as session:
        yield session


class RoomApi:
    """Small helper around the HTTP calls a polling client makes."""

    def __init__(self, client: TestClient, room_id: str):
        self.client = client
        self.room_id = room_id

    def suggest(self, name: str, session: str = "s-1"):
        return self.client.post(
            f"/rooms/{self.room_id}/suggestions", json={"name": name, "userSession": session}
        )

    def vote(self, suggestion_id: str, ip: str = "1.2.3.4", session: str = "s-1", **extra):
        body = {"suggestionId": suggestion_id, "userSession": session, **extra}
        return self.client.post(
            f"/rooms/{self.room_id}/votes", json=body, headers={"X-Forwarded-For": ip}
        )

    def unvote(self, suggestion_id: str, ip: str = "1.2.3.4", session: str = "s-1"):
        return self.client.request(
            "DELETE",
            f"/rooms/{self.room_id}/votes",
            json={"suggestionId": suggestion_id, "userSession": session},
            headers={"X-Forwarded-For": ip},
        )

    def tally(self):
        return self.client.get(f"/rooms/{self.room_id}/votes").json()["data"]

    def lock(self, locked: bool = True):
        return self.client.post(f"/rooms/{self.room_id}/lock", json={"isLocked": locked})


@pytest.fixture
def room(client):
    client.post("/rooms", json={"roomId": "AB12CD"})
    return RoomApi(client, "AB12CD")
