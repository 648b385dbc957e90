from __future__ import annotations

import pytest

from guildarc.core.errors import InvalidArgumentError, InvalidStateError, ProfileNotFoundError
from guildarc.core.navigator import next_profile_id, prev_profile_id, profile_id_by_index

IDS = ["all", "p1", "p2"]


def test_next_and_prev_wrap_around() -> None:
    assert next_profile_id(IDS, "all") == "p1"
    assert next_profile_id(IDS, "p2") == "all"
    assert prev_profile_id(IDS, "all") == "p2"
    assert prev_profile_id(IDS, "p1") == "all"


def test_stale_pointer_recovers_to_first() -> None:
    assert next_profile_id(IDS, "ghost") == "all"
    assert prev_profile_id(IDS, "ghost") == "p1"


def test_single_profile_cycles_to_itself() -> None:
    assert next_profile_id(["all"], "all") == "all"
    assert prev_profile_id(["all"], "all") == "all"


def test_empty_list_is_invalid_state() -> None:
    with pytest.raises(InvalidStateError):
        next_profile_id([], "all")
    with pytest.raises(InvalidStateError):
        prev_profile_id([], "all")


def test_by_index_is_one_based() -> None:
    assert profile_id_by_index(IDS, 1) == "all"
    assert profile_id_by_index(IDS, 3) == "p2"


def test_by_index_past_end_is_not_found() -> None:
    with pytest.raises(ProfileNotFoundError):
        profile_id_by_index(IDS, 5)


def test_by_index_rejects_zero() -> None:
    with pytest.raises(InvalidArgumentError):
        profile_id_by_index(IDS, 0)
