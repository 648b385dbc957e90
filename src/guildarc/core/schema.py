"""Persisted state schema, validation helpers, and load-time migration.

The persisted document looks like::

    {
      "activeProfileId": "all",
      "profiles": {
        "all": {"name": "All Servers", "emoji": "🌐", "servers": [], "folders": [], "isDefault": true},
        "profile_1700000000000": {"name": "Work", "emoji": "💼", "servers": ["1"], "folders": []}
      }
    }

Loading merges saved data over the built-in defaults so that documents
written before a field existed still produce a valid store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from guildarc.core.errors import InvalidArgumentError
from guildarc.core.models import (
    DEFAULT_PROFILE_EMOJI,
    DEFAULT_PROFILE_ID,
    DEFAULT_PROFILE_NAME,
    PROFILE_EMOJI,
    UNNAMED_PROFILE,
    Profile,
    default_profile,
)

ACTIVE_KEY = "activeProfileId"
LEGACY_ACTIVE_KEY = "activeProfile"
PROFILES_KEY = "profiles"


@dataclass(frozen=True)
class LoadedState:
    """Profiles and active pointer ready to seed a ProfileStore."""

    profiles: Dict[str, Profile]
    active_profile_id: str


def normalize_name(name: Any) -> str:
    """Return the trimmed profile name or raise InvalidArgumentError."""

    if not isinstance(name, str):
        raise InvalidArgumentError("Profile name must be a string")
    trimmed = name.strip()
    if not trimmed:
        raise InvalidArgumentError("Profile name cannot be empty")
    return trimmed


def validate_emoji(emoji: Any) -> str:
    """Return the emoji unchanged if it has visible content.

    Glyph well-formedness is not checked; custom multi-character input is
    stored verbatim.
    """

    if not isinstance(emoji, str) or not emoji.strip():
        raise InvalidArgumentError("Emoji cannot be empty")
    return emoji


def unique_ids(values: Iterable[Any]) -> Tuple[str, ...]:
    """Coerce ids to strings and drop duplicates, keeping first occurrence."""

    seen: Dict[str, None] = {}
    for value in values:
        if value is None:
            continue
        seen.setdefault(str(value), None)
    return tuple(seen)


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "name": profile.name,
        "emoji": profile.emoji,
        "servers": list(profile.servers),
        "folders": list(profile.folders),
    }
    if profile.is_default:
        payload["isDefault"] = True
    return payload


def dump_state(profiles: Mapping[str, Profile], active_profile_id: str) -> Dict[str, Any]:
    """Serialize store contents into the persisted document shape."""

    return {
        ACTIVE_KEY: active_profile_id,
        PROFILES_KEY: {profile_id: profile_to_dict(profile) for profile_id, profile in profiles.items()},
    }


def _profile_from_dict(profile_id: str, raw: Mapping[str, Any]) -> Profile:
    is_default = profile_id == DEFAULT_PROFILE_ID
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        name = DEFAULT_PROFILE_NAME if is_default else UNNAMED_PROFILE
    emoji = raw.get("emoji")
    if not isinstance(emoji, str) or not emoji.strip():
        emoji = DEFAULT_PROFILE_EMOJI if is_default else PROFILE_EMOJI

    if is_default:
        # The default profile is a universal filter; stored members are ignored.
        servers: Tuple[str, ...] = ()
        folders: Tuple[str, ...] = ()
    else:
        servers = unique_ids(_as_list(raw.get("servers")))
        folders = unique_ids(_as_list(raw.get("folders")))

    return Profile(
        id=profile_id,
        name=name,
        emoji=emoji,
        servers=servers,
        folders=folders,
        is_default=is_default,
    )


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def load_state(raw: Optional[Mapping[str, Any]]) -> LoadedState:
    """Merge a persisted document over the built-in defaults.

    Migration rules:
    - A saved ``profiles`` object replaces the default one wholesale.
    - ``"all"`` is synthesized (appended last) when missing.
    - Missing emoji fall back to the default glyphs.
    - Entries that are not objects are dropped.
    - An active id that no longer exists falls back to ``"all"``.
    """

    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    saved_profiles = data.get(PROFILES_KEY)
    profiles: Dict[str, Profile] = {}
    if isinstance(saved_profiles, Mapping):
        for profile_id, entry in saved_profiles.items():
            if not isinstance(entry, Mapping):
                continue
            key = str(profile_id)
            profiles[key] = _profile_from_dict(key, entry)
    else:
        profiles[DEFAULT_PROFILE_ID] = default_profile()

    if DEFAULT_PROFILE_ID not in profiles:
        profiles[DEFAULT_PROFILE_ID] = default_profile()

    active = data.get(ACTIVE_KEY, data.get(LEGACY_ACTIVE_KEY, DEFAULT_PROFILE_ID))
    active_id = str(active) if active is not None else DEFAULT_PROFILE_ID
    if active_id not in profiles:
        active_id = DEFAULT_PROFILE_ID

    return LoadedState(profiles=profiles, active_profile_id=active_id)
