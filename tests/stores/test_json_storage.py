from __future__ import annotations

import pytest

from workforce_portal.stores.storage import JsonFileStorage


def test_set_get_remove(storage):
    assert storage.get_item("thing") is None
    storage.set_item("thing", {"a": [1, 2]})
    assert storage.get_item("thing") == {"a": [1, 2]}
    storage.remove_item("thing")
    assert storage.get_item("thing") is None
    storage.remove_item("thing")


def test_last_write_wins(storage):
    storage.set_item("k", 1)
    storage.set_item("k", 2)
    assert storage.get_item("k") == 2


def test_no_temp_files_left_behind(tmp_path):
    storage = JsonFileStorage(tmp_path)
    storage.set_item("k", "v")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]


@pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
def test_rejects_unsafe_keys(storage, key):
    with pytest.raises(ValueError):
        storage.set_item(key, 1)
