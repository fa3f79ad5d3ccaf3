# tests/test_backend.py

"""Tests for the memory and file storage backends."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from src.storage.backend import FileBackend, MemoryBackend


class TestMemoryBackend(unittest.TestCase):
    """MemoryBackend get/set/list/delete and TTL."""

    def setUp(self) -> None:
        self.store = MemoryBackend()

    def test_set_and_get(self) -> None:
        """A stored value is returned."""
        self.store.set("description:1", "hello")
        self.assertEqual(self.store.get("description:1"), "hello")

    def test_missing_key_is_none(self) -> None:
        """Unknown keys read as None."""
        self.assertIsNone(self.store.get("nope"))

    def test_list_by_prefix(self) -> None:
        """list() filters by prefix and sorts keys."""
        self.store.set("description:2", "b")
        self.store.set("description:1", "a")
        self.store.set("other", "c")
        self.assertEqual(
            self.store.list("description:"),
            ["description:1", "description:2"],
        )

    def test_delete(self) -> None:
        """delete() reports whether a key existed."""
        self.store.set("k", 1)
        self.assertTrue(self.store.delete("k"))
        self.assertFalse(self.store.delete("k"))

    @patch("src.storage.backend.time.time")
    def test_ttl_expiry(self, mock_time) -> None:
        """Entries vanish once their TTL has elapsed."""
        mock_time.return_value = 1000.0
        self.store.set("k", "v", ttl=10)
        mock_time.return_value = 1009.0
        self.assertEqual(self.store.get("k"), "v")
        mock_time.return_value = 1010.0
        self.assertIsNone(self.store.get("k"))

    @patch("src.storage.backend.time.time")
    def test_default_ttl(self, mock_time) -> None:
        """The default TTL applies when set() gets none."""
        store = MemoryBackend(default_ttl=5)
        mock_time.return_value = 0.0
        store.set("k", "v")
        mock_time.return_value = 6.0
        self.assertEqual(store.list(), [])

    def test_clear(self) -> None:
        """clear() reports the number of purged entries."""
        self.store.set("a", 1)
        self.store.set("b", 2)
        self.assertEqual(self.store.clear(), 2)
        self.assertIsNone(self.store.get("a"))


class TestFileBackend(unittest.TestCase):
    """FileBackend persistence on disk."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, ignore_errors=True)
        self.store = FileBackend(self.tmp_dir)

    def test_round_trip_survives_new_instance(self) -> None:
        """A second backend on the same directory sees stored values."""
        self.store.set("description:42", "texto com acentuação 🔥")
        other = FileBackend(self.tmp_dir)
        self.assertEqual(other.get("description:42"), "texto com acentuação 🔥")

    def test_unsafe_key_encoded(self) -> None:
        """Keys map onto safe file names but list() returns the real key."""
        self.store.set("description:1/2", {"a": 1})
        files = [p.name for p in self.tmp_dir.iterdir()]
        self.assertEqual(files, ["description%3A1%2F2.json"])
        self.assertEqual(self.store.list("description:"), ["description:1/2"])

    def test_similar_keys_do_not_collide(self) -> None:
        """Keys differing only in punctuation keep separate values."""
        self.store.set("description:1", "A")
        self.store.set("description_1", "B")
        self.store.set("description/1", "C")
        self.assertEqual(self.store.get("description:1"), "A")
        self.assertEqual(self.store.get("description_1"), "B")
        self.assertEqual(self.store.get("description/1"), "C")
        self.assertEqual(len(list(self.tmp_dir.iterdir())), 3)

    def test_unknown_similar_key_misses(self) -> None:
        """A key that only sanitises to a stored one is a miss."""
        self.store.set("description:1", "A")
        self.assertIsNone(self.store.get("description_1"))

    def test_delete(self) -> None:
        """delete() removes the file."""
        self.store.set("k", 1)
        self.assertTrue(self.store.delete("k"))
        self.assertFalse(self.store.delete("k"))
        self.assertIsNone(self.store.get("k"))

    @patch("src.storage.backend.time.time")
    def test_expired_entry_removed(self, mock_time) -> None:
        """Expired files read as None and are deleted."""
        mock_time.return_value = 100.0
        self.store.set("k", "v", ttl=1)
        mock_time.return_value = 200.0
        self.assertIsNone(self.store.get("k"))
        self.assertEqual(list(self.tmp_dir.iterdir()), [])

    def test_corrupt_file_reads_none(self) -> None:
        """An unreadable JSON file is treated as a miss."""
        (self.tmp_dir / "bad.json").write_text("{not json", encoding="utf-8")
        with self.assertLogs("promo_cards.storage", level="WARNING"):
            self.assertIsNone(self.store.get("bad"))


if __name__ == "__main__":
    unittest.main()
