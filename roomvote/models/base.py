"""Column helpers shared by the voting tables."""

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Column widths, shared with the request schemas.
ROOM_ID_MAX_LENGTH = 32
ID_MAX_LENGTH = 36
LABEL_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 64
