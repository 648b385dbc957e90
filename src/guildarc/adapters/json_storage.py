"""JSON file persistence adapter.

Implements the core PersistencePort by keeping the whole profile document in
one JSON file. Writes go through a temporary sibling file and an atomic
replace, so a crash mid-write leaves the previous state intact.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from guildarc.core.errors import PersistenceError

LOGGER = logging.getLogger(__name__)


class JsonStateStorage:
    """Thin JSON wrapper that satisfies the PersistencePort contract."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the saved document, or None when nothing was saved yet."""

        if not self._path.exists():
            LOGGER.info("No saved profiles at %s, starting from defaults", self._path)
            return None
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"{self._path} is not valid JSON: {exc.msg}") from exc
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self._path}: {exc.strerror or exc}") from exc
        if not isinstance(loaded, dict):
            raise PersistenceError(f"{self._path} root must be an object")
        return loaded

    def save(self, state: Dict[str, Any]) -> None:
        """Write the full document, replacing the previous file atomically."""

        payload = json.dumps(state, indent=2, ensure_ascii=False) + "\n"
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._path}: {exc.strerror or exc}") from exc
        LOGGER.debug("Saved profiles to %s", self._path)
