from __future__ import annotations

import json

import pytest

from quizforge.core.store import JsonStore


def test_save_then_load(store: JsonStore) -> None:
    assert store.save("library", {"quizzes": [1, 2]}) is True

    assert store.load("library") == {"quizzes": [1, 2]}
    path = store.path_for("library")
    assert json.loads(path.read_text(encoding="utf-8")) == {"quizzes": [1, 2]}
    assert not list(store.root.glob("*.tmp"))


def test_load_missing_key_returns_none(store: JsonStore) -> None:
    assert store.load("nothing") is None


def test_load_corrupt_file_logs_and_returns_none(store, caplog) -> None:
    path = store.path_for("preferences")
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level("ERROR"):
        assert store.load("preferences") is None
    assert "Failed to load stored value" in caplog.text


def test_save_unserializable_returns_false(store, caplog) -> None:
    with caplog.at_level("ERROR"):
        assert store.save("bad", {"value": object()}) is False
    assert "Failed to save value" in caplog.text
    assert not store.path_for("bad").exists()


def test_save_unwritable_root_returns_false(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    store = JsonStore(blocker / "nested")

    assert store.save("library", []) is False


@pytest.mark.parametrize("key", ["", "../escape", "with space", ".hidden"])
def test_path_for_rejects_invalid_keys(store: JsonStore, key: str) -> None:
    with pytest.raises(ValueError):
        store.path_for(key)
