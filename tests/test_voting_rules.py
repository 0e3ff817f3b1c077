import pytest

from roomvote.errors import ValidationError
from roomvote.services.voting import (
    ROOM_CODE_ALPHABET,
    clean_suggestion_name,
    client_address,
    count_votes,
    find_leader,
    generate_room_id,
    normalize_room_id,
    voter_key,
)


def test_normalize_room_id():
    assert normalize_room_id(" ab12cd ") == "AB12CD"
    assert normalize_room_id("   ") is None
    assert normalize_room_id(None) is None


def test_generate_room_id_uses_code_alphabet():
    code = generate_room_id(6)
    assert len(code) == 6
    assert all(ch in ROOM_CODE_ALPHABET for ch in code)


def test_clean_suggestion_name_trims():
    assert clean_suggestion_name("  Eagle ") == "Eagle"


@pytest.mark.parametrize("name", [None, "", "    "])
def test_clean_suggestion_name_rejects_blank(name):
    with pytest.raises(ValidationError):
        clean_suggestion_name(name)


def test_clean_suggestion_name_length_bound():
    assert clean_suggestion_name("x" * 50) == "x" * 50
    assert clean_suggestion_name("  " + "x" * 50 + "  ") == "x" * 50
    with pytest.raises(ValidationError):
        clean_suggestion_name("x" * 51)


def test_client_address_prefers_first_forwarded_entry():
    headers = {"x-forwarded-for": "1.2.3.4, 10.0.0.1", "x-real-ip": "9.9.9.9"}
    assert client_address(headers) == "1.2.3.4"


def test_client_address_falls_back_to_real_ip_then_unknown():
    assert client_address({"x-real-ip": "9.9.9.9"}) == "9.9.9.9"
    assert client_address({}) == "unknown"


def test_voter_key_policies():
    assert voter_key("address", "1.2.3.4", "s-1") == "1.2.3.4"
    assert voter_key("session", "1.2.3.4", "s-1") == "s-1"
    with pytest.raises(ValueError):
        voter_key("cookie", "1.2.3.4", "s-1")


def test_count_votes_omits_unvoted():
    assert count_votes(["a", "b", "a"]) == {"a": 2, "b": 1}
    assert count_votes([]) == {}


def test_find_leader_strictly_highest():
    assert find_leader({"a": 1, "b": 3}, ["a", "b", "c"]) == "b"


def test_find_leader_tie_goes_to_earliest_suggestion():
    # Mapping order disagrees with display order on purpose.
    assert find_leader({"b": 2, "a": 2}, ["a", "b"]) == "a"


def test_find_leader_none_without_votes():
    assert find_leader({}, ["a"]) is None
    assert find_leader({"a": 0}, ["a"]) is None
