"""
Room Vote – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them through a
single ``import roomvote.models``.
"""

from roomvote.models.room import Room               # noqa: F401
from roomvote.models.suggestion import Suggestion   # noqa: F401
from roomvote.models.vote import Vote               # noqa: F401
