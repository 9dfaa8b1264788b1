#!/usr/bin/env python3
# artwork.py – rev-a1  (2026-10-19)
"""Cover-file thumbnails (PNG bytes) for the album-art label."""

from __future__ import annotations
import io
from pathlib import Path
from typing  import Dict, Optional, Tuple, Union

from PIL import Image, ImageFile
ImageFile.LOAD_TRUNCATED_IMAGES = True

from logging_config import get_logger

log = get_logger("artwork")

_cache: Dict[Tuple[str, int], Optional[bytes]] = {}

def thumbnail(path: Union[str, Path, None], px: int) -> Optional[bytes]:
    """Return *path* scaled to fit px×px as PNG bytes, or None when there is
    no art or the file is not a readable image."""
    if not path:
        return None
    key = (str(path), px)
    if key in _cache:
        return _cache[key]

    data = None
    try:
        with Image.open(path) as im:
            im = im.convert("RGBA")
            im.thumbnail((px, px), Image.Resampling.LANCZOS)
            buf = io.BytesIO()
            im.save(buf, format="PNG")
            data = buf.getvalue()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        log.warning("cannot read album art %s: %s", path, e)
    _cache[key] = data
    return data

def clear_cache() -> None:
    _cache.clear()
