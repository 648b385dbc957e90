"""Cyclic profile navigation helpers (core domain)."""

from __future__ import annotations

from typing import Sequence

from guildarc.core.errors import InvalidArgumentError, InvalidStateError, ProfileNotFoundError


def _position(ids: Sequence[str], active_id: str) -> int:
    if not ids:
        raise InvalidStateError("No profiles to navigate")
    try:
        return list(ids).index(active_id)
    except ValueError:
        # A stale pointer behaves like "before the first profile".
        return -1


def next_profile_id(ids: Sequence[str], active_id: str) -> str:
    """Return the profile after ``active_id``, wrapping to the first one."""

    index = _position(ids, active_id)
    return ids[(index + 1) % len(ids)]


def prev_profile_id(ids: Sequence[str], active_id: str) -> str:
    """Return the profile before ``active_id``, wrapping to the last one."""

    index = _position(ids, active_id)
    return ids[(index - 1 + len(ids)) % len(ids)]


def profile_id_by_index(ids: Sequence[str], number: int) -> str:
    """Return the profile for a 1-based jump number."""

    if number < 1:
        raise InvalidArgumentError(f"Profile number must be 1 or greater: {number}")
    if number > len(ids):
        raise ProfileNotFoundError(f"No profile at position {number}")
    return ids[number - 1]
