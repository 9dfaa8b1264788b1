#!/usr/bin/env python3
# scanner.py – rev-f3  (2026-10-19)
"""
Folder discovery.

• One flat directory per scan – no recursion.
• Audio = .mp3 / .wav / .ogg (suffix compared case-insensitively).
• Cover art is looked up once per folder from a fixed list of file names;
  every track of that scan shares the result.
• A folder that vanished since it was registered simply yields no tracks.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing  import List, Optional, Union

from logging_config import get_logger

log = get_logger("scanner")

AUDIO_EXTS = {".mp3", ".wav", ".ogg"}
ART_NAMES  = ("cover.jpg", "cover.png", "album.jpg", "album.png")   # probe order

# ────────────────────────── data class ────────────────────────────
@dataclass(frozen=True)
class Track:
    name:      str
    path:      str
    album_art: Optional[str] = None

    def __repr__(self):
        return f"<Track {self.name!r}>"

# ───────────────────────── helpers ────────────────────────────────
def is_audio(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in AUDIO_EXTS

def find_album_art(folder: Path) -> Optional[str]:
    """Return the first existing cover file in *folder*, or None."""
    for name in ART_NAMES:
        art = folder / name
        if art.is_file():
            return str(art)
    return None

# ───────────────────────── public API ─────────────────────────────
def scan_folder(folder: Union[str, Path]) -> List[Track]:
    """Return a Track for every audio file directly inside *folder*, in
    file-name order.  Missing or unreadable folders give an empty list."""
    root = Path(folder)
    try:
        if not root.is_dir():
            log.debug("skip %s: not a directory", root)
            return []
        entries = sorted(root.iterdir(), key=lambda p: p.name)
        art     = find_album_art(root)
        tracks  = [Track(name=p.name, path=str(p), album_art=art)
                   for p in entries if is_audio(p) and p.is_file()]
    except OSError as e:
        log.warning("cannot scan %s: %s", root, e)
        return []
    log.info("scanned %s: %d track(s), art=%s", root, len(tracks), art)
    return tracks
