import json, random, tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import session
from playlist import PlaylistModel
from registry import FolderRegistry
from session  import PlayerSession
from fakes import RecordingView

class PlayerSessionTests(TestCase):
    def setUp(self):
        self._tmp  = tempfile.TemporaryDirectory()
        self.base  = Path(self._tmp.name)
        self.state = self.base / "appstate.json"
        self.view  = RecordingView()

    def tearDown(self):
        self._tmp.cleanup()

    def folder(self, name, *files):
        d = self.base / name
        d.mkdir()
        for f in files:
            (d / f).touch()
        return str(d)

    def make_session(self):
        return PlayerSession(self.view, registry=FolderRegistry(self.state),
                             playlist=PlaylistModel(rng=random.Random(1)))

    def test_startup_scans_in_registry_order(self):
        rock = self.folder("rock", "r1.mp3", "r2.ogg")
        jazz = self.folder("jazz", "j1.wav")
        gone = str(self.base / "deleted")
        self.state.write_text(json.dumps({"folders": [jazz, gone, rock]}), encoding="utf-8")

        s = self.make_session()
        self.assertEqual(s.startup(), 3)
        self.assertEqual([t.name for t in s.playlist.original], ["j1.wav", "r1.mp3", "r2.ogg"])
        self.assertEqual(self.view.calls, [("list", ["j1.wav", "r1.mp3", "r2.ogg"])])
        self.assertEqual(s.controller.state.current_index, -1)

    def test_startup_with_corrupt_state(self):
        self.state.write_text("nope", encoding="utf-8")
        s = self.make_session()
        self.assertEqual(s.startup(), 0)
        self.assertEqual(len(s.playlist), 0)

    def test_add_folder_registers_and_scans(self):
        rock = self.folder("rock", "a.mp3", "b.txt", "cover.jpg")
        s = self.make_session(); s.startup()
        self.assertTrue(s.add_folder(rock))
        track, = s.playlist.original
        self.assertEqual((track.name, track.path, track.album_art),
                         ("a.mp3", str(Path(rock) / "a.mp3"), str(Path(rock) / "cover.jpg")))
        self.assertEqual(json.loads(self.state.read_text("utf-8"))["folders"], [rock])

    def test_add_same_folder_twice_scans_once(self):
        rock = self.folder("rock", "a.mp3")
        s = self.make_session(); s.startup()
        with patch.object(session, "scan_folder", wraps=session.scan_folder) as spy:
            self.assertTrue(s.add_folder(rock))
            before = self.state.read_bytes()
            self.assertFalse(s.add_folder(rock))
        spy.assert_called_once_with(rock)
        self.assertEqual(self.state.read_bytes(), before)
        self.assertEqual(len(s.playlist), 1)

    def test_cancelled_dialog_is_noop(self):
        s = self.make_session(); s.startup()
        self.view.calls.clear()
        self.assertFalse(s.add_folder(None))
        self.assertFalse(s.add_folder(""))
        self.assertEqual(self.view.calls, [])
        self.assertFalse(self.state.exists())

    def test_new_folder_lands_after_existing_tracks(self):
        a = self.folder("a", "1.mp3")
        b = self.folder("b", "2.mp3")
        s = self.make_session(); s.startup()
        s.add_folder(a); s.controller.select(0)
        s.add_folder(b)
        self.assertEqual([t.name for t in s.playlist.working], ["1.mp3", "2.mp3"])
        self.assertEqual(s.controller.current().name, "1.mp3")

    def test_default_registry(self):
        with patch("storage.STATE_FILE", self.state):
            s = PlayerSession(self.view)
            self.assertEqual(s.startup(), 0)
