import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.location_attendance.location_attendance.core.exceptions import StorageError
from src.location_attendance.location_attendance.storage.file_storage import JsonFileStorage


def test_missing_file_reads_as_empty(tmp_path):
    storage = JsonFileStorage(tmp_path / "nope.json")
    assert storage.get_item("attendanceRecords") is None


def test_values_survive_a_new_instance(tmp_path):
    path = tmp_path / "data" / "storage.json"
    JsonFileStorage(path).set_item("attendanceRecords", "[]")
    JsonFileStorage(path).set_item("other", "x")

    reopened = JsonFileStorage(path)
    assert reopened.get_item("attendanceRecords") == "[]"
    assert reopened.get_item("other") == "x"
    assert json.loads(path.read_text(encoding="utf-8")) == {"attendanceRecords": "[]", "other": "x"}


@pytest.mark.parametrize("content", [b"{not json", b"[1, 2]", b"\xff\xfe not utf-8"])
def test_unreadable_file_raises_and_is_left_alone(tmp_path, content):
    path = tmp_path / "storage.json"
    path.write_bytes(content)
    storage = JsonFileStorage(path)

    with pytest.raises(StorageError):
        storage.get_item("attendanceRecords")
    with pytest.raises(StorageError):
        storage.set_item("attendanceRecords", "[]")
    assert path.read_bytes() == content


def test_no_temp_files_left_behind(tmp_path):
    storage = JsonFileStorage(tmp_path / "storage.json")
    storage.set_item("k", "v")
    assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]


def test_concurrent_writers_keep_every_key(tmp_path):
    storage = JsonFileStorage(tmp_path / "storage.json")

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda i: storage.set_item(f"k{i}", str(i)), range(30)))

    assert all(storage.get_item(f"k{i}") == str(i) for i in range(30))
