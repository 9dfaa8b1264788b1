#!/usr/bin/env python3
# registry.py – rev-r2  (2026-10-19)
"""
Remembered music folders.

Insertion order is kept (it decides start-up scan order) and a folder is
only ever stored once.  Every successful ``register`` is written to disk
before it returns.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing  import Any, Dict, List, Optional

import storage
from logging_config import get_logger

log = get_logger("registry")

class FolderRegistry:
    def __init__(self, state_file: Optional[Path] = None):
        self._file    = state_file
        self._state: Dict[str, Any] = {}
        self._folders: List[str]    = []
        self._loaded  = False

    @property
    def folders(self) -> List[str]:
        return list(self._folders)

    def __contains__(self, path: str) -> bool:
        return self._norm(path) in self._folders

    @staticmethod
    def _norm(path: str) -> str:
        return os.path.normpath(str(path))

    # ─────────────────────────────── persistence
    def load(self) -> List[str]:
        self._state   = storage.load(self._file)
        self._loaded  = True
        self._folders = []
        for f in self._state["folders"]:
            if not isinstance(f, str) or not f:
                log.warning("dropping invalid folder entry %r", f)
                continue
            f = self._norm(f)
            if f not in self._folders:
                self._folders.append(f)
        log.info("%d registered folder(s)", len(self._folders))
        return self.folders

    def save(self) -> bool:
        if not self._loaded:
            self._merge_from_disk()
        self._state["folders"] = list(self._folders)
        return storage.save(self._state, self._file)

    def _merge_from_disk(self) -> None:
        pending = self._folders
        pending_state = self._state
        self.load()
        self._state.update(pending_state)
        for f in pending:
            if f not in self._folders:
                self._folders.append(f)

    def register(self, path: str) -> bool:
        """Add *path*; False if it is already registered (nothing written)."""
        if not self._loaded:
            self._merge_from_disk()
        path = self._norm(path)
        if path in self._folders:
            log.debug("already registered: %s", path)
            return False
        self._folders.append(path)
        self.save()
        log.info("registered %s", path)
        return True

    # ─────────────────────────────── settings
    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if key == "folders":
            raise KeyError("folders are changed through register()")
        self._state[key] = value
