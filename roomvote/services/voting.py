"""Pure voting rules: room codes, name admission, voter identity, tallies."""

import secrets
import string
from collections import Counter
from typing import Dict, Iterable, Mapping, Optional, Sequence

from roomvote.errors import ValidationError
from roomvote.models.base import ADDRESS_MAX_LENGTH

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
UNKNOWN_ADDRESS = "unknown"

VOTER_IDENTITY_ADDRESS = "address"
VOTER_IDENTITY_SESSION = "session"


def normalize_room_id(raw: Optional[str]) -> Optional[str]:
    """Room codes are typed by people: ignore surrounding blanks and case."""
    if raw is None:
        return None
    code = raw.strip().upper()
    return code or None


def generate_room_id(length: int = 6) -> str:
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def clean_suggestion_name(name: Optional[str], max_length: int = 50) -> str:
    """Return the trimmed name, or raise ``ValidationError``."""
    text = (name or "").strip()
    if not text:
        raise ValidationError("Suggestion name is required")
    if len(text) > max_length:
        raise ValidationError(f"Suggestion name must be at most {max_length} characters")
    return text


def client_address(headers: Mapping[str, str]) -> str:
    """Derive the caller's network address from proxy headers.

    First entry of ``X-Forwarded-For``, then ``X-Real-IP``, then the
    ``"unknown"`` sentinel. Every caller without either header shares
    that one identity.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first[:ADDRESS_MAX_LENGTH]
    real_ip = (headers.get("x-real-ip") or "").strip()
    return real_ip[:ADDRESS_MAX_LENGTH] or UNKNOWN_ADDRESS


def voter_key(policy: str, address: str, session: str) -> str:
    if policy == VOTER_IDENTITY_SESSION:
        return session
    if policy == VOTER_IDENTITY_ADDRESS:
        return address
    raise ValueError(f"Unknown voter identity policy: {policy!r}")


def count_votes(suggestion_ids: Iterable[str]) -> Dict[str, int]:
    """Map each voted suggestion id to its vote count.

    Suggestions nobody voted for are absent; callers default them to zero.
    """
    return dict(Counter(suggestion_ids))


def find_leader(tally: Mapping[str, int], suggestion_order: Sequence[str]) -> Optional[str]:
    """Return the id with the strictly highest count, or None.

    ``suggestion_order`` is the display order (oldest first) and decides
    ties: the earliest suggestion keeps the lead. Ids in the tally that
    are not listed are scanned after the listed ones.
    """
    ordered = list(suggestion_order)
    listed = set(ordered)
    ordered.extend(sorted(sid for sid in tally if sid not in listed))

    leader_id = None
    max_votes = 0
    for sid in ordered:
        count = tally.get(sid, 0)
        if count > max_votes:
            max_votes = count
            leader_id = sid
    return leader_id
