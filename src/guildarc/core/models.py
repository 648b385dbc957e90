"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any host-specific types. Profiles are immutable records: the
store replaces a record on every change, so a profile handed to a caller
never changes underneath it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

DEFAULT_PROFILE_ID = "all"
DEFAULT_PROFILE_NAME = "All Servers"
DEFAULT_PROFILE_EMOJI = "🌐"
PROFILE_EMOJI = "📁"
UNNAMED_PROFILE = "Unnamed Profile"


@dataclass(frozen=True)
class Profile:
    """A named visibility filter over servers and folders."""

    id: str
    name: str
    emoji: str
    servers: Tuple[str, ...] = ()
    folders: Tuple[str, ...] = ()
    is_default: bool = False

    def has_server(self, server_id: str) -> bool:
        return server_id in self.servers

    def has_folder(self, folder_id: str) -> bool:
        return folder_id in self.folders


def default_profile() -> Profile:
    """Return the built-in profile that shows every server and folder."""

    return Profile(
        id=DEFAULT_PROFILE_ID,
        name=DEFAULT_PROFILE_NAME,
        emoji=DEFAULT_PROFILE_EMOJI,
        is_default=True,
    )


@dataclass(frozen=True)
class Server:
    """A directory entry that can be assigned to a profile on its own."""

    id: str
    name: str


@dataclass(frozen=True)
class Folder:
    """A flat group of servers.

    Hosts may report ungrouped servers wrapped in a folder entry without an
    id; such entries are not folders for assignment or resolution purposes.
    """

    folder_id: Optional[str]
    name: Optional[str]
    guild_ids: Tuple[str, ...] = ()

    @property
    def is_real(self) -> bool:
        return bool(self.folder_id)

    @property
    def label(self) -> str:
        return self.name or f"Folder {self.folder_id}"


@dataclass(frozen=True)
class DirectorySnapshot:
    """Read-only view of all servers and folders at one point in time."""

    servers: Mapping[str, Server] = field(default_factory=dict)
    folders: Tuple[Folder, ...] = ()

    @classmethod
    def build(cls, servers: Iterable[Server], folders: Iterable[Folder]) -> "DirectorySnapshot":
        return cls(
            servers={server.id: server for server in servers},
            folders=tuple(folders),
        )

    def server_ids(self) -> List[str]:
        return list(self.servers)

    def folder_ids(self) -> List[str]:
        return [folder.folder_id for folder in self.folders if folder.folder_id]

    def folder(self, folder_id: str) -> Optional[Folder]:
        for folder in self.folders:
            if folder.folder_id and folder.folder_id == folder_id:
                return folder
        return None

    def folders_containing(self, server_id: str) -> List[Folder]:
        """Return every real folder listing the server (normally zero or one)."""

        return [folder for folder in self.folders if folder.is_real and server_id in folder.guild_ids]

    def ungrouped_server_ids(self) -> List[str]:
        """Return server ids that no real folder contains, in directory order."""

        grouped = {guild_id for folder in self.folders if folder.is_real for guild_id in folder.guild_ids}
        return [server_id for server_id in self.servers if server_id not in grouped]

    def server_name(self, server_id: str) -> str:
        server = self.servers.get(server_id)
        return server.name if server else server_id


@dataclass(frozen=True)
class Resolution:
    """Visible server ids and visible folder ids for the active profile."""

    visible_servers: frozenset
    visible_folders: frozenset

    def is_server_visible(self, server_id: str) -> bool:
        return server_id in self.visible_servers

    def is_folder_visible(self, folder_id: str) -> bool:
        return folder_id in self.visible_folders


@dataclass(frozen=True)
class ProfileSummary:
    """Display row for one profile; index is the 1-based jump number."""

    profile_id: str
    name: str
    emoji: str
    is_default: bool
    is_active: bool
    index: int


@dataclass(frozen=True)
class MenuToggle:
    """Toggle state of one profile inside a server or folder menu."""

    profile_id: str
    label: str
    checked: bool
    inherited: bool = False
