import io, tempfile
from pathlib import Path
from unittest import TestCase

from PIL import Image

import artwork

class ThumbnailTests(TestCase):
    def setUp(self):
        artwork.clear_cache()
        self._tmp = tempfile.TemporaryDirectory()
        self.dir  = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_scales_to_fit(self):
        src = self.dir / "cover.jpg"
        Image.new("RGB", (600, 300), "red").save(src)
        data = artwork.thumbnail(str(src), 150)
        with Image.open(io.BytesIO(data)) as im:
            self.assertEqual(im.format, "PNG")
            self.assertEqual(im.size, (150, 75))

    def test_no_art(self):
        self.assertIsNone(artwork.thumbnail(None, 150))

    def test_missing_or_broken_file(self):
        self.assertIsNone(artwork.thumbnail(str(self.dir / "nope.png"), 150))
        bad = self.dir / "cover.png"
        bad.write_bytes(b"not an image")
        self.assertIsNone(artwork.thumbnail(str(bad), 150))

    def test_cached(self):
        src = self.dir / "album.png"
        Image.new("RGB", (64, 64), "blue").save(src)
        first = artwork.thumbnail(src, 32)
        src.unlink()
        self.assertEqual(artwork.thumbnail(src, 32), first)
