"""Validation helpers for profile editing forms."""

from __future__ import annotations

from dataclasses import dataclass

from guildarc.core.errors import InvalidArgumentError
from guildarc.core.schema import normalize_name


@dataclass
class FieldInfo:
    normalized: str | None
    error: str | None = None


def parse_profile_name(raw_value: str) -> FieldInfo:
    try:
        return FieldInfo(normalize_name(raw_value))
    except InvalidArgumentError as exc:
        return FieldInfo(None, str(exc))


def parse_emoji_input(raw_value: str) -> FieldInfo:
    """Trim typed emoji input; the store keeps whatever remains verbatim."""

    value = raw_value.strip()
    if not value:
        return FieldInfo(None, "emoji is required")
    return FieldInfo(value)


def parse_jump_number(key: str, jump_keys: tuple[str, ...]) -> int | None:
    """Return the 1-based profile number bound to ``key``, if any."""

    try:
        return jump_keys.index(key) + 1
    except ValueError:
        return None
