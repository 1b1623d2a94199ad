"""Tests for shared/storage.py."""

import json
import threading
import time

import pytest
from unittest.mock import patch

from shared.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    create_storage,
)


class TestInMemoryStorage:
    def test_set_get_remove(self):
        storage = InMemoryStorage()
        storage.set_item("token", "abc")
        assert storage.get_item("token") == "abc"
        assert "token" in storage

        storage.remove_item("token")
        assert storage.get_item("token") is None
        assert "token" not in storage

    def test_remove_absent_key_is_noop(self):
        storage = InMemoryStorage()
        storage.remove_item("missing")
        assert storage.get_item("missing") is None

    def test_initial_items_are_copied(self):
        initial = {"token": "abc"}
        storage = InMemoryStorage(initial)
        storage.set_item("token", "xyz")
        assert initial["token"] == "abc"

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryStorage(), KeyValueStorage)


class TestJsonFileStorage:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "session.json"
        JsonFileStorage(path).set_item("token", "abc")

        assert JsonFileStorage(path).get_item("token") == "abc"
        assert json.loads(path.read_text()) == {"token": "abc"}

    def test_missing_file_reads_as_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "nope.json")
        assert storage.get_item("token") is None

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "session.json"
        JsonFileStorage(path).set_item("user", "{}")
        assert path.exists()

    def test_remove_item(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "session.json")
        storage.set_item("token", "abc")
        storage.set_item("user", "{}")

        storage.remove_item("token")

        assert storage.get_item("token") is None
        assert storage.get_item("user") == "{}"

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")

        storage = JsonFileStorage(path)

        assert storage.get_item("token") is None
        storage.set_item("token", "abc")
        assert storage.get_item("token") == "abc"

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "session.json")
        storage.set_item("token", "abc")
        storage.set_item("token", "def")

        assert not [p.name for p in tmp_path.iterdir() if p.name.startswith(".storage-")]
        assert (tmp_path / "session.json").exists()

    def test_two_instances_see_each_others_writes(self, tmp_path):
        path = tmp_path / "session.json"
        first = JsonFileStorage(path)
        second = JsonFileStorage(path)

        first.set_item("token", "abc")
        assert second.get_item("token") == "abc"

        second.remove_item("token")
        assert first.get_item("token") is None

    def test_overlapping_writers_keep_both_keys(self, tmp_path):
        """A write that starts while another is mid-update waits for it."""
        path = tmp_path / "session.json"
        tab_a = JsonFileStorage(path)
        tab_b = JsonFileStorage(path)
        b_has_read = threading.Event()
        real_read = tab_b._read

        def slow_read():
            items = real_read()
            b_has_read.set()
            time.sleep(0.2)
            return items

        with patch.object(tab_b, "_read", side_effect=slow_read):
            writer = threading.Thread(target=tab_b.set_item, args=("user", "{}"))
            writer.start()
            assert b_has_read.wait(timeout=5)
            tab_a.set_item("token", "t1")
            writer.join(timeout=5)

        assert tab_a.get_item("token") == "t1"
        assert tab_a.get_item("user") == "{}"

    def test_concurrent_writes_to_different_keys(self, tmp_path):
        path = tmp_path / "session.json"
        tabs = [JsonFileStorage(path), JsonFileStorage(path)]
        threads = [
            threading.Thread(target=tabs[i % 2].set_item, args=(f"key-{i}", str(i)))
            for i in range(20)
        ]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert all(tabs[0].get_item(f"key-{i}") == str(i) for i in range(20))

    def test_remove_on_missing_file_creates_nothing(self, tmp_path):
        JsonFileStorage(tmp_path / "session.json").remove_item("token")
        assert list(tmp_path.iterdir()) == []


class TestCreateStorage:
    def test_none_selects_memory(self):
        assert isinstance(create_storage(None), InMemoryStorage)

    def test_path_selects_file(self, tmp_path):
        storage = create_storage(str(tmp_path / "s.json"))
        assert isinstance(storage, JsonFileStorage)
