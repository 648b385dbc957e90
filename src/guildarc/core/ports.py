"""Ports (interfaces) used by the profile session.

Ports define the minimal contracts for persistence and directory adapters so
that the core can be reused with different hosts and backends.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from guildarc.core.models import DirectorySnapshot, Folder, Server


class PersistencePort(Protocol):
    """Load and save the serialized profile state."""

    def load(self) -> Optional[Dict[str, Any]]:
        ...

    def save(self, state: Dict[str, Any]) -> None:
        ...


class DirectoryPort(Protocol):
    """Read-only inventory of servers and folders provided by the host."""

    def get_servers(self) -> Mapping[str, Server]:
        ...

    def get_folders(self) -> Sequence[Folder]:
        ...


def read_snapshot(directory: DirectoryPort) -> DirectorySnapshot:
    """Read servers and folders from ``directory`` into one snapshot."""

    servers = directory.get_servers()
    folders = directory.get_folders()
    return DirectorySnapshot(servers=dict(servers), folders=tuple(folders))
