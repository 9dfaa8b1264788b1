#!/usr/bin/env python3
# storage.py – rev-s9 (2026-10-19)

r"""
Resilient persistent-state helper
═════════════════════════════════
* One JSON file per user
  – Windows  : %APPDATA%\Folder-Player\appstate.json
  – macOS/*nix: $XDG_CONFIG_HOME/folder-player/appstate.json (~/.config)
  – FOLDER_PLAYER_CONFIG overrides the directory on every platform
* Atomic writes (tmp + replace) with a .bak copy of the previous file
* A corrupt file rolls back to the .bak; if that is bad too the defaults
  are used.  Nothing here ever raises on load.
"""

from __future__ import annotations
import json, os, shutil
from pathlib import Path
from typing  import Any, Dict, Optional

from logging_config import get_logger

log = get_logger("storage")

# ────────────────────────────────────────────────────────────
# 1. resolve canonical config path
# ────────────────────────────────────────────────────────────
def config_dir() -> Path:
    override = os.getenv("FOLDER_PLAYER_CONFIG")
    if override:
        return Path(override)
    if os.name == "nt":
        # %APPDATA% should exist for *all* normal accounts.  If it doesn't,
        # fall back to <User>\AppData\Roaming.
        appdata = Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
        return appdata / "Folder-Player"
    return Path(os.getenv("XDG_CONFIG_HOME") or Path.home() / ".config") / "folder-player"

CFG_DIR    = config_dir()
STATE_FILE = CFG_DIR / "appstate.json"

def _bak(path: Path) -> Path:
    return path.with_suffix(".bak")

# ────────────────────────────────────────────────────────────
# 2. atomic writer (+ backup)
# ────────────────────────────────────────────────────────────
def _atomic_write(path: Path, data: Any) -> None:
    """Write *data* as UTF-8 JSON atomically and keep a .bak copy."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    # create/refresh backup *before* replacement
    if path.exists():
        shutil.copy2(path, _bak(path))
    tmp.replace(path)

# ────────────────────────────────────────────────────────────
# 3. helpers
# ────────────────────────────────────────────────────────────
def _empty_state() -> Dict:
    return {
        "version": 1,
        "folders": [],
        "volume":  80,
    }

def _load_json(path: Path) -> Optional[Dict]:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("unreadable state file %s: %s", path, e)
        return None
    if isinstance(data, list):          # bare folder list
        data = {"folders": data}
    if not isinstance(data, dict):
        log.warning("unexpected state in %s: %r", path, type(data).__name__)
        return None
    return data

# ────────────────────────────────────────────────────────────
# 4. public API
# ────────────────────────────────────────────────────────────
def load(path: Optional[Path] = None) -> Dict:
    """Return persisted state merged over the defaults.  Rolls back to .bak
    on corruption."""
    path = path or STATE_FILE
    data = _load_json(path)
    if data is None:
        bak  = _bak(path)
        data = _load_json(bak)
        if data is not None:
            log.warning("restored state from backup %s", bak)
            try:
                shutil.copy2(bak, path)
            except OSError as e:
                log.error("could not restore %s: %s", path, e)
        else:
            return _empty_state()

    base = _empty_state()
    base.update(data)
    if not isinstance(base["folders"], list):
        log.warning("ignoring malformed folder list in %s", path)
        base["folders"] = []
    vol = base["volume"]
    if isinstance(vol, bool) or not isinstance(vol, int) or not 0 <= vol <= 100:
        log.warning("ignoring malformed volume %r in %s", vol, path)
        base["volume"] = _empty_state()["volume"]
    return base

def save(state: Dict, path: Optional[Path] = None) -> bool:
    """Write *state* to disk, safely.  Returns False (and logs) on failure."""
    path = path or STATE_FILE
    # add / update version tag for future migrations
    state["version"] = 1
    try:
        _atomic_write(path, state)
    except OSError as e:
        log.error("failed to save state to %s: %s", path, e)
        return False
    log.debug("state saved to %s", path)
    return True
