import json, os, tempfile
from pathlib import Path
from unittest import TestCase

import storage
from registry import FolderRegistry

class StorageTestCase(TestCase):
    def setUp(self):
        self._tmp  = tempfile.TemporaryDirectory()
        self.state = Path(self._tmp.name) / "cfg" / "appstate.json"

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, text, path=None):
        path = path or self.state
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

class StorageTests(StorageTestCase):
    def test_missing_file_gives_defaults(self):
        data = storage.load(self.state)
        self.assertEqual(data["folders"], [])
        self.assertEqual(data["volume"], 80)

    def test_save_then_load(self):
        self.assertTrue(storage.save({"folders": ["/a"], "volume": 30}, self.state))
        data = storage.load(self.state)
        self.assertEqual(data["folders"], ["/a"])
        self.assertEqual(data["volume"], 30)
        self.assertEqual(data["version"], 1)

    def test_corrupt_file_rolls_back_to_backup(self):
        storage.save({"folders": ["/old"]}, self.state)
        storage.save({"folders": ["/old", "/new"]}, self.state)     # .bak = /old
        self.write("{ not json")
        self.assertEqual(storage.load(self.state)["folders"], ["/old"])
        self.assertEqual(json.loads(self.state.read_text("utf-8"))["folders"], ["/old"])

    def test_corrupt_without_backup_is_empty(self):
        self.write("\x00garbage")
        self.assertEqual(storage.load(self.state)["folders"], [])

    def test_bare_list_is_a_folder_list(self):
        self.write('["/x", "/y"]')
        self.assertEqual(storage.load(self.state)["folders"], ["/x", "/y"])

    def test_malformed_volume_falls_back(self):
        for bad in ("null", '"loud"', "true", "250", "-1", "12.5"):
            with self.subTest(volume=bad):
                self.write('{"folders": ["/a"], "volume": ' + bad + "}")
                data = storage.load(self.state)
                self.assertEqual(data["volume"], 80)
                self.assertEqual(data["folders"], ["/a"])

    def test_valid_volume_kept(self):
        self.write('{"volume": 0}')
        self.assertEqual(storage.load(self.state)["volume"], 0)

    def test_malformed_folders_value(self):
        self.write('{"folders": "oops"}')
        self.assertEqual(storage.load(self.state)["folders"], [])

    def test_save_failure_returns_false(self):
        self.write("")
        blocked = self.state / "appstate.json"       # parent is a file
        self.assertFalse(storage.save({"folders": []}, blocked))

class FolderRegistryTests(StorageTestCase):
    def test_load_absent(self):
        self.assertEqual(FolderRegistry(self.state).load(), [])

    def test_load_corrupt(self):
        self.write("{{{")
        self.assertEqual(FolderRegistry(self.state).load(), [])

    def test_load_drops_junk_and_duplicates(self):
        self.write(json.dumps({"folders": ["/b", 3, "/a", "/b", None, "", "/a/"]}))
        self.assertEqual(FolderRegistry(self.state).load(), ["/b", "/a"])

    def test_register_persists(self):
        reg = FolderRegistry(self.state); reg.load()
        self.assertTrue(reg.register("/music/rock"))
        self.assertTrue(reg.register("/music/jazz"))
        self.assertEqual(FolderRegistry(self.state).load(), ["/music/rock", "/music/jazz"])
        self.assertIn("/music/rock", reg)

    def test_register_twice_leaves_file_alone(self):
        reg = FolderRegistry(self.state); reg.load()
        self.assertTrue(reg.register("/a"))
        before = self.state.read_bytes()
        os.utime(self.state, (0, 0))
        self.assertFalse(reg.register("/a"))
        self.assertFalse(reg.register("/a/"))
        self.assertEqual(self.state.read_bytes(), before)
        self.assertEqual(self.state.stat().st_mtime, 0)
        self.assertEqual(reg.folders, ["/a"])

    def test_settings_round_trip(self):
        reg = FolderRegistry(self.state); reg.load()
        self.assertEqual(reg.get("volume"), 80)
        reg.set("volume", 55); reg.save()
        again = FolderRegistry(self.state); again.load()
        self.assertEqual(again.get("volume"), 55)

    def test_folders_not_settable(self):
        with self.assertRaises(KeyError):
            FolderRegistry(self.state).set("folders", [])

    def test_corrupt_volume_reads_as_default(self):
        self.write('{"folders": [], "volume": null}')
        reg = FolderRegistry(self.state); reg.load()
        self.assertEqual(int(reg.get("volume", 80)), 80)

    def test_register_before_load_keeps_disk_folders(self):
        storage.save({"folders": ["/old"], "volume": 20}, self.state)
        reg = FolderRegistry(self.state)
        self.assertTrue(reg.register("/new"))
        self.assertFalse(reg.register("/old"))
        data = storage.load(self.state)
        self.assertEqual(data["folders"], ["/old", "/new"])
        self.assertEqual(data["volume"], 20)

    def test_save_before_load_keeps_disk_folders(self):
        storage.save({"folders": ["/old"]}, self.state)
        reg = FolderRegistry(self.state)
        reg.set("volume", 10); reg.save()
        data = storage.load(self.state)
        self.assertEqual(data["folders"], ["/old"])
        self.assertEqual(data["volume"], 10)
