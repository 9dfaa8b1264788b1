#!/usr/bin/env python3
# playlist.py – rev-p4  (2026-10-19)
"""
Two views over the same tracks:

  original – discovery order, append-only for the life of the process
  working  – what playback walks; == original, or a permutation of it
             while shuffle is on

Appending while shuffled reshuffles the whole enlarged list.
"""

from __future__ import annotations
import random
from typing  import Iterable, List, Optional

from scanner import Track
from logging_config import get_logger

log = get_logger("playlist")

class PlaylistModel:
    def __init__(self, rng: Optional[random.Random] = None):
        self.original: List[Track] = []
        self.working:  List[Track] = []
        self.shuffled  = False
        self._rng      = rng or random.Random()

    def __len__(self) -> int:
        return len(self.working)

    def __repr__(self):
        return f"<PlaylistModel {len(self.original)} tracks shuffled={self.shuffled}>"

    # ─────────────────────────────── mutation
    def append(self, tracks: Iterable[Track]) -> None:
        new = list(tracks)
        self.original.extend(new)
        if self.shuffled:
            self.working = self._shuffle(self.original)
        else:
            self.working = list(self.original)
        log.debug("appended %d track(s), total %d", len(new), len(self.original))

    def set_shuffled(self, enabled: bool) -> bool:
        """Switch between original and shuffled order.  Returns False if the
        mode was already *enabled*."""
        enabled = bool(enabled)
        if enabled == self.shuffled:
            return False
        self.shuffled = enabled
        self.working  = self._shuffle(self.original) if enabled else list(self.original)
        log.debug("shuffle %s", "on" if enabled else "off")
        return True

    def _shuffle(self, tracks: List[Track]) -> List[Track]:
        # Fisher–Yates
        out = list(tracks)
        for i in range(len(out) - 1, 0, -1):
            j = self._rng.randint(0, i)
            out[i], out[j] = out[j], out[i]
        return out

    # ─────────────────────────────── lookup
    def at(self, index: int) -> Optional[Track]:
        if 0 <= index < len(self.working):
            return self.working[index]
        return None

    def index_of(self, track: Optional[Track]) -> int:
        """Position of this exact Track object in the working order, or -1."""
        if track is None:
            return -1
        return next((i for i, t in enumerate(self.working) if t is track), -1)

    def names(self) -> List[str]:
        return [t.name for t in self.working]
