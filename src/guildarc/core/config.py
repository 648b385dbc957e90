"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the session and frontends expect so the app layer can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_JUMP_KEYS = ("1", "2", "3", "4", "5", "6", "7", "8", "9")


@dataclass(frozen=True)
class ShortcutConfig:
    """Key chords bound to profile navigation (Textual key names)."""

    next_profile: str = "right_square_bracket"
    prev_profile: str = "left_square_bracket"
    jump_keys: Tuple[str, ...] = field(default=DEFAULT_JUMP_KEYS)

    def describe(self) -> list[tuple[str, str]]:
        """Return (chord, action) pairs for help screens."""

        rows = [
            (self.next_profile, "Next profile"),
            (self.prev_profile, "Previous profile"),
        ]
        if self.jump_keys:
            rows.append((f"{self.jump_keys[0]}..{self.jump_keys[-1]}", "Jump to profile by number"))
        return rows
