"""State container for the profile panel."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PanelState:
    selected_profile_id: str | None = None
    status: str = ""
    error: str | None = None
