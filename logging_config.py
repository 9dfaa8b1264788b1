#!/usr/bin/env python3
# logging_config.py – rev-l2  (2026-10-19)
"""
Logger setup and exception types shared by every Folder-Player module.

Modules call ``get_logger("scanner")`` at import time; nothing is printed
until the GUI calls ``setup_logging()`` once at start-up.
"""

from __future__ import annotations
import logging, sys
from pathlib import Path
from typing  import Optional

ROOT_LOGGER = "folder_player"
LOG_FORMAT  = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Install a stderr handler (and optionally a file handler) on the root
    Folder-Player logger.  Unknown level names fall back to INFO."""
    lvl    = getattr(logging, str(level).upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(lvl)
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(lvl)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"))
        logger.addHandler(fh)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")

# ────────────────────────── exceptions ─────────────────────────────
class FolderPlayerError(Exception):
    """Base exception for Folder-Player."""

class PlayerError(FolderPlayerError):
    """libVLC could not be initialised or refused a media file."""
