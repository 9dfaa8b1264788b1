#!/usr/bin/env python3
# player.py – rev-v3  (2026-10-19)
"""
libVLC media surface.

• One track at a time; load_and_play() replaces whatever was playing
• End-of-media is only *flagged* on the VLC thread; tick() (GUI timer)
  either replays the same file (loop on) or calls on_finished()
• Volume 0‥100, seek in seconds
"""

from __future__ import annotations
from typing  import Callable, Optional

import vlc

from logging_config import get_logger, PlayerError

log = get_logger("player")

VLC_OPTS = ["--no-video", "--quiet"]

class VLCPlayer:
    def __init__(self, on_finished: Callable[[], None], *, volume: int = 80):
        self._cb        = on_finished
        self._instance  = vlc.Instance(VLC_OPTS)
        if self._instance is None:
            raise PlayerError("libVLC could not be initialised – is VLC installed?")
        self.player: Optional[vlc.MediaPlayer] = None
        self.path: Optional[str] = None
        self._loop        = False
        self._volume      = max(0, min(int(volume), 100))
        self._end_pending = False

    # ─────────────────────────────── media helpers
    def _attach_end_event(self):
        self.player.event_manager().event_attach(
            vlc.EventType.MediaPlayerEndReached,
            lambda *_: setattr(self, "_end_pending", True)
        )

    def _set_media(self, path: str):
        if self.player:
            self.player.stop(); self.player.release()
        self.player = self._instance.media_player_new()
        self.player.set_media(self._instance.media_new(path))
        self._attach_end_event()
        self.player.audio_set_volume(self._volume)
        if self.player.play() == -1:
            log.error("libVLC refused %s", path)

    # ─────────────────────────────── basic controls
    def load_and_play(self, path: str) -> None:
        self.path         = path
        self._end_pending = False
        self._set_media(path)

    def resume(self): self.player and self.player.set_pause(0)
    def pause(self):  self.player and self.player.set_pause(1)
    def stop(self):
        if self.player:
            self.player.stop(); self.player.release(); self.player = None

    def is_playing(self) -> bool:
        return bool(self.player and self.player.is_playing())

    def set_loop(self, enabled: bool) -> None:
        self._loop = bool(enabled)

    def set_volume(self, volume: int) -> None:
        self._volume = max(0, min(int(volume), 100))
        if self.player:
            self.player.audio_set_volume(self._volume)

    @property
    def volume(self) -> int:
        return self._volume

    # ─────────────────────────────── position helpers
    def length(self)   -> float: return max(0, self.player.get_length() or 0)/1000 if self.player else 0.0
    def position(self) -> float: return max(0, self.player.get_time()   or 0)/1000 if self.player else 0.0
    def seek(self, s: float):
        if self.player:
            self.player.set_time(int(max(0.0, s)*1000))

    # ─────────────────────────────── GUI tick (every 0.1 s)
    def tick(self):
        if not self._end_pending:
            return
        self._end_pending = False
        if self._loop and self.path:
            log.debug("loop %s", self.path)
            self._set_media(self.path)
        else:
            self._cb()

    def close(self):
        self.stop()
        self._instance.release()
