import json
import logging

import pytest

from errors import PersistenceFailure
from store import JsonFileStore


def test_root_directory_is_created(tmp_path):
    root = tmp_path / "nested" / "db"
    JsonFileStore(root)
    assert root.is_dir()


def test_missing_collection_is_empty(file_store):
    assert file_store.read("tasks") == []
    assert file_store.load("tasks") == []


def test_save_writes_pretty_printed_array(file_store):
    records = [{"id": "1", "title": "Ёлка"}]
    assert file_store.save("tasks", records) is True

    text = file_store.path_for("tasks").read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert "Ёлка" in text
    assert json.loads(text) == records
    assert file_store.load("tasks") == records


def test_save_overwrites_whole_collection(file_store):
    file_store.save("tasks", [{"id": "1"}, {"id": "2"}])
    file_store.save("tasks", [{"id": "3"}])
    assert file_store.load("tasks") == [{"id": "3"}]


def test_corrupt_file_loads_empty_and_logs(file_store, caplog):
    file_store.path_for("users").write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="store"):
        assert file_store.load("users") == []
    assert "users" in caplog.text

    with pytest.raises(PersistenceFailure):
        file_store.read("users")


def test_non_array_document_is_a_failure(file_store):
    file_store.path_for("users").write_text('{"id": "1"}', encoding="utf-8")
    with pytest.raises(PersistenceFailure):
        file_store.read("users")
    assert file_store.load("users") == []


def test_unserializable_records_fail_write(file_store):
    with pytest.raises(PersistenceFailure):
        file_store.write("tasks", [{"id": "1", "when": object()}])
    assert file_store.save("tasks", [{"id": "1", "when": object()}]) is False


def test_write_failure_is_reported(tmp_path):
    store = JsonFileStore(tmp_path / "db")
    # a directory where the collection file should be
    store.path_for("tasks").mkdir()
    assert store.save("tasks", []) is False
    with pytest.raises(PersistenceFailure):
        store.write("tasks", [])


def test_lock_is_per_collection(file_store):
    assert file_store.lock("tasks") is file_store.lock("tasks")
    assert file_store.lock("tasks") is not file_store.lock("users")
