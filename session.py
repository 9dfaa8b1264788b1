#!/usr/bin/env python3
# session.py – rev-x2  (2026-10-19)
"""
PlayerSession – everything one running player owns: the folder registry,
the playlist model and the playback controller.  Event handlers receive the
session instead of reaching for module globals.
"""

from __future__ import annotations
from typing  import Optional

from scanner    import scan_folder
from playlist   import PlaylistModel
from registry   import FolderRegistry
from controller import PlaybackController, Presentation
from logging_config import get_logger

log = get_logger("session")

class PlayerSession:
    def __init__(self, presentation: Presentation, *,
                 registry: Optional[FolderRegistry] = None,
                 playlist: Optional[PlaylistModel]  = None,
                 restart_on_shuffle: bool = True):
        self.registry   = registry or FolderRegistry()
        self.playlist   = playlist or PlaylistModel()
        self.controller = PlaybackController(self.playlist, presentation,
                                             restart_on_shuffle=restart_on_shuffle)

    def startup(self) -> int:
        """Load remembered folders and scan them in registry order.
        Returns the number of tracks found."""
        tracks = []
        for folder in self.registry.load():
            tracks.extend(scan_folder(folder))
        self.controller.add_tracks(tracks)
        log.info("start-up: %d track(s) from %d folder(s)",
                 len(tracks), len(self.registry.folders))
        return len(tracks)

    def add_folder(self, path: Optional[str]) -> bool:
        """Handle a folder chosen by the user.  Empty *path* means the dialog
        was cancelled.  Already-registered folders are not scanned again."""
        if not path:
            return False
        if not self.registry.register(path):
            return False
        self.controller.add_tracks(scan_folder(path))
        return True
