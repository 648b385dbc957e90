from __future__ import annotations

from guildarc.core.config import DEFAULT_JUMP_KEYS
from guildarc.frontend.validators import parse_emoji_input, parse_jump_number, parse_profile_name


def test_profile_name_is_trimmed() -> None:
    info = parse_profile_name("  Work  ")
    assert info.normalized == "Work"
    assert info.error is None


def test_blank_profile_name_reports_error() -> None:
    info = parse_profile_name("   ")
    assert info.normalized is None
    assert info.error == "Profile name cannot be empty"


def test_emoji_input() -> None:
    assert parse_emoji_input(" 🎮 ").normalized == "🎮"
    assert parse_emoji_input("").error == "emoji is required"


def test_jump_number_lookup() -> None:
    assert parse_jump_number("1", DEFAULT_JUMP_KEYS) == 1
    assert parse_jump_number("9", DEFAULT_JUMP_KEYS) == 9
    assert parse_jump_number("0", DEFAULT_JUMP_KEYS) is None
