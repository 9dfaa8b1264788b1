#!/usr/bin/env python3
# controller.py – rev-c5  (2026-10-19)
"""
Playback state machine.

PlaybackController owns the current index and the shuffle / repeat flags and
drives a *Presentation* (the window + media surface).  Every index operation
on an empty playlist is a silent no-op; current_index is always -1 or a valid
index into the working order.

Toggling shuffle restarts playback at index 0 by default.  Pass
``restart_on_shuffle=False`` to keep the current track playing instead.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing  import Callable, Iterable, List, Optional

from scanner  import Track
from playlist import PlaylistModel
from logging_config import get_logger

log = get_logger("controller")

# ────────────────────────── presentation boundary ─────────────────
class Presentation:
    """What the controller needs from the UI / media surface."""

    def load_and_play(self, path: str) -> None:
        raise NotImplementedError("Subclasses must implement load_and_play()")

    def pause(self) -> None:
        raise NotImplementedError("Subclasses must implement pause()")

    def resume(self) -> None:
        raise NotImplementedError("Subclasses must implement resume()")

    def set_loop(self, enabled: bool) -> None:
        raise NotImplementedError("Subclasses must implement set_loop()")

    def render_list(self, names: List[str], on_select: Callable[[int], bool]) -> None:
        raise NotImplementedError("Subclasses must implement render_list()")

    def render_now_playing(self, name: str) -> None:
        raise NotImplementedError("Subclasses must implement render_now_playing()")

    def render_album_art(self, path: Optional[str]) -> None:
        raise NotImplementedError("Subclasses must implement render_album_art()")

# ────────────────────────── state ─────────────────────────────────
@dataclass
class PlaybackState:
    current_index:   int  = -1
    shuffle_enabled: bool = False
    repeat_enabled:  bool = False
    loaded:          bool = False     # a track has been handed to the surface

# ────────────────────────── controller ────────────────────────────
class PlaybackController:
    def __init__(self, playlist: PlaylistModel, presentation: Presentation, *,
                 restart_on_shuffle: bool = True):
        self.playlist   = playlist
        self.view       = presentation
        self.state      = PlaybackState()
        self.restart_on_shuffle = restart_on_shuffle

    # ─────────────────────────────── lookup
    def current(self) -> Optional[Track]:
        return self.playlist.at(self.state.current_index)

    # ─────────────────────────────── selection
    def select(self, index: int) -> bool:
        track = self.playlist.at(index)
        if track is None:
            log.debug("select(%s) ignored, %d track(s)", index, len(self.playlist))
            return False
        self.state.current_index = index
        self.state.loaded        = True
        log.info("playing #%d %s", index, track.path)
        self.view.load_and_play(track.path)
        self.view.render_now_playing(track.name)
        self.view.render_album_art(track.album_art)
        return True

    def next(self) -> bool:
        n = len(self.playlist)
        if not n:
            return False
        return self.select((self.state.current_index + 1) % n)

    def previous(self) -> bool:
        n = len(self.playlist)
        if not n:
            return False
        return self.select((self.state.current_index - 1 + n) % n)

    def track_finished(self) -> None:
        """End of media reached without the surface looping it."""
        self.next()

    # ─────────────────────────────── transport
    def play(self) -> None:
        if self.state.loaded:
            self.view.resume()

    def pause(self) -> None:
        if self.state.loaded:
            self.view.pause()

    # ─────────────────────────────── modes
    def toggle_repeat(self) -> bool:
        self.state.repeat_enabled = not self.state.repeat_enabled
        self.view.set_loop(self.state.repeat_enabled)
        log.info("repeat %s", "on" if self.state.repeat_enabled else "off")
        return self.state.repeat_enabled

    def toggle_shuffle(self) -> bool:
        playing = self.current()
        self.playlist.set_shuffled(not self.playlist.shuffled)
        self.state.shuffle_enabled = self.playlist.shuffled
        self._render_list()
        log.info("shuffle %s", "on" if self.state.shuffle_enabled else "off")

        if self.restart_on_shuffle:
            if len(self.playlist):
                self.select(0)
            else:
                self.state.current_index = -1
        else:
            self.state.current_index = self.playlist.index_of(playing)
        return self.state.shuffle_enabled

    # ─────────────────────────────── growth
    def add_tracks(self, tracks: Iterable[Track]) -> None:
        """Append to the playlist; the current track keeps playing and
        current_index follows it into the new working order."""
        playing = self.current()
        self.playlist.append(tracks)
        self.state.current_index = self.playlist.index_of(playing)
        self._render_list()

    def _render_list(self) -> None:
        self.view.render_list(self.playlist.names(), self.select)
