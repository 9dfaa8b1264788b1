#!/usr/bin/env python3
# main.py – rev-w7  (2026-10-19)
"""
Folder-Player
─────────────
Folder-based desktop audio player (PySide6 + libVLC).

Key features
• Register music folders (button or drag & drop); remembered across runs
• Sequential / shuffled playback, single-track repeat
• Cover art from cover.jpg / cover.png / album.jpg / album.png
• Timeline seek (click / drag / wheel; Ctrl = fine), volume slider
• Global media keys through the *keyboard* module when it is available
"""

from __future__ import annotations
import os, sys, time
from pathlib import Path
from typing import Callable, List, Optional

from PySide6.QtWidgets import (
    QApplication, QWidget, QListWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QFileDialog, QLabel, QMessageBox, QFrame, QSlider
)
from PySide6.QtGui    import QPixmap, QDragEnterEvent, QDropEvent
from PySide6.QtCore   import Qt, QTimer, Signal
try:
    import keyboard
except Exception:               # not installed, or no permission to hook keys
    keyboard = None

import artwork, scanner, storage
from controller     import Presentation
from player         import VLCPlayer
from session        import PlayerSession
from logging_config import setup_logging, get_logger, PlayerError

log = get_logger("gui")

# ═════════════════ constants & helpers ═════════════════
TICKS, MAX_SECONDS = 10, 86_400   # slider: 100 ms per tick; clamp 24 h

MEDIA_KEYS = {
    "play/pause media":    "_toggle_play",
    "next track":          "_next",
    "previous track":      "_previous",
}

def fmt_time(s: float) -> str:
    return f"{int(s)//60:02}:{int(s)%60:02}"

class TimelineSlider(QSlider):
    """Clickable / draggable / wheel-seek slider (Ctrl = ±1 s, else ±5 s)."""
    jumpRequested = Signal(float)          # seconds (float)

    def __init__(self,*a,**k):
        super().__init__(*a,**k); self.setOrientation(Qt.Horizontal)

    def _val(self,x:int)->int:
        r = max(0, min(x/max(1,self.width()), 1))
        return int(self.minimum() + r*(self.maximum()-self.minimum()))

    def _jump_to(self,e):
        v=self._val(int(e.position().x()))
        self.setValue(v); self.jumpRequested.emit(v/TICKS); e.accept()

    def mousePressEvent(self,e):
        if e.button()==Qt.LeftButton:
            self.setSliderDown(True); self._jump_to(e)
        super().mousePressEvent(e)

    def mouseMoveEvent(self,e):
        if self.isSliderDown(): self._jump_to(e)
        super().mouseMoveEvent(e)

    def mouseReleaseEvent(self,e):
        if self.isSliderDown(): self.setSliderDown(False); e.accept()
        super().mouseReleaseEvent(e)

    def wheelEvent(self,e):
        step = 1 if e.modifiers() & Qt.ControlModifier else 5
        delta = step * (e.angleDelta().y() // 120)
        self.setValue(max(self.minimum(), min(self.maximum(), self.value()+delta*TICKS)))
        self.jumpRequested.emit(self.value()/TICKS); e.accept()

# ═════════════════ MainWindow ═════════════════
class MainWindow(QWidget, Presentation):
    ART_PX=150
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Folder-Player")
        self.resize(800,600); self.setAcceptDrops(True)
        self._on_select: Callable[[int], bool] = lambda i: False
        self._last_media_evt = 0.0
        self._build_widgets()

        self.session = PlayerSession(self)
        self.ctl     = self.session.controller
        self._player = VLCPlayer(self.ctl.track_finished)

        self._wire_signals()
        self.session.startup()
        volume = int(self.session.registry.get("volume", 80))
        self.sld_volume.setValue(volume); self._player.set_volume(volume)
        QTimer(self,interval=100,timeout=self._tick).start()
        self._bind_media_keys()

    # ---------- UI
    def _build_widgets(self):
        self.btn_folder  = QPushButton("Select Folder")
        self.btn_prev, self.btn_play, self.btn_pause, self.btn_next = (
            QPushButton(t) for t in ("Previous","Play","Pause","Next"))
        self.btn_shuffle = QPushButton("Shuffle On")
        self.btn_repeat  = QPushButton("Repeat Off")
        tb=QHBoxLayout(); tb.addWidget(self.btn_folder); tb.addStretch()
        for b in (self.btn_prev,self.btn_play,self.btn_pause,self.btn_next,self.btn_shuffle,self.btn_repeat):
            tb.addWidget(b)

        self.music_list  = QListWidget(frameShape=QFrame.NoFrame)
        self.lbl_now     = QLabel("Now Playing: –")
        self.lbl_now.setStyleSheet("font-weight:bold;")
        self.lbl_art     = QLabel(alignment=Qt.AlignCenter)
        self.lbl_art.setFixedSize(self.ART_PX,self.ART_PX)
        self.lbl_art.setStyleSheet("background:palette(Base);")

        side=QVBoxLayout(); side.addWidget(self.lbl_now); side.addStretch(); side.addWidget(self.lbl_art,0,Qt.AlignCenter)
        mid =QHBoxLayout(); mid.addWidget(self.music_list,1); mid.addLayout(side)

        self.slider     = TimelineSlider(); self.slider.setEnabled(False)
        self.lbl_time   = QLabel("00:00 / 00:00",alignment=Qt.AlignRight|Qt.AlignVCenter); self.lbl_time.setFixedWidth(110)
        self.sld_volume = QSlider(Qt.Horizontal); self.sld_volume.setRange(0,100); self.sld_volume.setFixedWidth(120)
        pb=QHBoxLayout(); pb.addWidget(self.slider,1); pb.addWidget(self.lbl_time); pb.addWidget(QLabel("Vol")); pb.addWidget(self.sld_volume)

        root=QVBoxLayout(self); root.addLayout(tb); root.addLayout(mid,1); root.addLayout(pb)

    # ---------- signals
    def _wire_signals(self):
        self.btn_folder.clicked.connect(self._select_folder)
        self.btn_prev.clicked.connect(self._previous)
        self.btn_next.clicked.connect(self._next)
        self.btn_play.clicked.connect(self.ctl.play)
        self.btn_pause.clicked.connect(self.ctl.pause)
        self.btn_shuffle.clicked.connect(self._toggle_shuffle)
        self.btn_repeat.clicked.connect(self._toggle_repeat)
        self.music_list.itemClicked.connect(lambda it: self._on_select(self.music_list.row(it)))
        self.slider.jumpRequested.connect(self._player.seek)
        self.sld_volume.valueChanged.connect(self._player.set_volume)

    # ═════════════════ Presentation ═════════════════
    def load_and_play(self, path: str) -> None:
        self._player.load_and_play(path); self.slider.setEnabled(True)

    def pause(self) -> None:  self._player.pause()
    def resume(self) -> None: self._player.resume()
    def set_loop(self, enabled: bool) -> None: self._player.set_loop(enabled)

    def render_list(self, names: List[str], on_select: Callable[[int], bool]) -> None:
        self._on_select = on_select
        self.music_list.clear(); self.music_list.addItems(names)
        self._highlight_row()

    def render_now_playing(self, name: str) -> None:
        self.lbl_now.setText(f"Now Playing: {name}")
        self._highlight_row()

    def render_album_art(self, path: Optional[str]) -> None:
        pix = QPixmap()
        data = artwork.thumbnail(path, self.ART_PX)
        if data: pix.loadFromData(data, "PNG")
        self.lbl_art.setPixmap(pix)

    def _highlight_row(self):
        idx=self.ctl.state.current_index if hasattr(self,"ctl") else -1
        if 0<=idx<self.music_list.count(): self.music_list.setCurrentRow(idx)
        else: self.music_list.clearSelection()

    # ═════════════════ actions ═════════════════
    def _select_folder(self):
        folder=QFileDialog.getExistingDirectory(self,"Choose music folder")
        self.session.add_folder(folder or None)

    def _next(self):     self.ctl.next()
    def _previous(self): self.ctl.previous()

    def _toggle_play(self):
        if self._player.is_playing(): self.ctl.pause()
        else: self.ctl.play()

    def _toggle_shuffle(self):
        on=self.ctl.toggle_shuffle()
        self.btn_shuffle.setText("Shuffle Off" if on else "Shuffle On")

    def _toggle_repeat(self):
        on=self.ctl.toggle_repeat()
        self.btn_repeat.setText("Repeat On" if on else "Repeat Off")

    # ═════════════════ drag & drop ═════════════════
    @staticmethod
    def _drop_folder(p:Path)->Optional[Path]:
        if p.is_dir(): return p
        if p.is_file() and scanner.is_audio(p): return p.parent
        return None

    def dragEnterEvent(self,e:QDragEnterEvent):
        if any(self._drop_folder(Path(u.toLocalFile())) for u in e.mimeData().urls()):
            e.acceptProposedAction()
        else:
            e.ignore()

    def dropEvent(self,e:QDropEvent):
        for url in e.mimeData().urls():
            folder=self._drop_folder(Path(url.toLocalFile()))
            if folder: self.session.add_folder(str(folder))

    # ═════════════════ media keys ═════════════════
    def _bind_media_keys(self):
        self._hotkey_ids: list = []
        if not keyboard:
            return
        for alias, slot in MEDIA_KEYS.items():
            try:
                hid = keyboard.add_hotkey(alias, lambda s=slot: self._on_media_key(s),
                                          suppress=False)
                self._hotkey_ids.append(hid)
                log.debug("media key bound: %s", alias)
            except (ValueError, ImportError, OSError, RuntimeError) as e:
                log.info("media key %r unavailable: %s", alias, e)

    def _on_media_key(self, slot: str) -> None:
        """Runs on the keyboard hook thread; hop to the GUI thread."""
        now = time.monotonic()
        if now - self._last_media_evt < 0.25:   # two aliases for one press
            return
        self._last_media_evt = now
        QTimer.singleShot(0, getattr(self, slot))

    # ═════════════════ timer tick ═════════════════
    def _tick(self):
        self._player.tick()
        if self._player.player:
            length=max(1,min(MAX_SECONDS,self._player.length()))
            pos=max(0,min(self._player.position(),length))
            if not self.slider.isSliderDown():
                self.slider.setMaximum(int(length*TICKS)); self.slider.setValue(int(pos*TICKS))
            self.lbl_time.setText(f"{fmt_time(pos)} / {fmt_time(length)}")

    # ═════════════════ close ═════════════════
    def closeEvent(self,e):
        if keyboard:
            for hid in self._hotkey_ids:
                try:
                    keyboard.remove_hotkey(hid)
                except (KeyError, ValueError):
                    pass
        self.session.registry.set("volume", self._player.volume)
        self.session.registry.save()
        self._player.close(); super().closeEvent(e)

# ═════════════════ entry-point ═════════════════
def main() -> int:
    log_file = storage.CFG_DIR / "folder-player.log" if os.getenv("FOLDER_PLAYER_LOGFILE") else None
    if log_file: log_file.parent.mkdir(parents=True, exist_ok=True)
    setup_logging(os.getenv("FOLDER_PLAYER_LOG", "INFO"), log_file)
    app = QApplication(sys.argv)
    try:
        win = MainWindow()
    except PlayerError as e:
        log.critical("%s", e)
        QMessageBox.critical(None, "Folder-Player", str(e))
        return 1
    win.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
