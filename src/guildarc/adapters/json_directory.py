"""Directory provider that reads a host export from a JSON file.

Expected shape (the layout a chat client reports for its sidebar)::

    {
      "servers": [{"id": "1", "name": "Gaming"}, ...],
      "folders": [{"folderId": "f1", "folderName": "Work", "guildIds": ["2", "3"]}, ...]
    }

``servers`` may also be an object keyed by server id whose values are either
a name or an object with a ``name`` field. Folder entries without a
``folderId`` wrap ungrouped servers and are kept as-is.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from guildarc.core.errors import DirectoryError
from guildarc.core.models import Folder, Server
from guildarc.core.schema import unique_ids

LOGGER = logging.getLogger(__name__)


def parse_servers(raw: Any) -> Dict[str, Server]:
    """Normalize the ``servers`` section into an ordered id -> Server map."""

    servers: Dict[str, Server] = {}
    if isinstance(raw, dict):
        for server_id, value in raw.items():
            name = value.get("name") if isinstance(value, dict) else value
            key = str(server_id)
            servers[key] = Server(id=key, name=str(name) if name else key)
    elif isinstance(raw, list):
        for entry in raw:
            if not isinstance(entry, dict) or entry.get("id") is None:
                continue
            key = str(entry["id"])
            name = entry.get("name")
            servers[key] = Server(id=key, name=str(name) if name else key)
    return servers


def parse_folders(raw: Any) -> List[Folder]:
    """Normalize the ``folders`` section, preserving sidebar order."""

    folders: List[Folder] = []
    if not isinstance(raw, list):
        return folders
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        folder_id = entry.get("folderId")
        name = entry.get("folderName")
        guild_ids = entry.get("guildIds") or []
        folders.append(
            Folder(
                folder_id=str(folder_id) if folder_id not in (None, "") else None,
                name=str(name) if name else None,
                guild_ids=unique_ids(guild_ids if isinstance(guild_ids, list) else []),
            )
        )
    return folders


class JsonDirectoryProvider:
    """Satisfies the DirectoryPort contract from a snapshot file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_servers(self) -> Dict[str, Server]:
        return parse_servers(self._read().get("servers"))

    def get_folders(self) -> List[Folder]:
        return parse_folders(self._read().get("folders"))

    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            LOGGER.warning("Directory snapshot not found: %s", self._path)
            return {}
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise DirectoryError(f"{self._path} is not valid JSON: {exc.msg}") from exc
        except OSError as exc:
            raise DirectoryError(f"Cannot read {self._path}: {exc.strerror or exc}") from exc
        if not isinstance(loaded, dict):
            raise DirectoryError(f"{self._path} root must be an object")
        return loaded
