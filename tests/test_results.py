import json
import os

import pytest

from scraper_builder.errors import CorruptOutputError
from scraper_builder.results import (
    NO_DATA_DIR_MESSAGE,
    NO_DATA_FILES_MESSAGE,
    data_files_newest_first,
    resolve_latest_output,
)


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_missing_data_directory_is_a_success_without_data(tmp_path):
    outcome = resolve_latest_output("quotes", tmp_path, tmp_path / "data" / "quotes")

    assert outcome.data is None
    assert outcome.data_file is None
    assert outcome.message == NO_DATA_DIR_MESSAGE


def test_data_directory_without_json_is_a_success_without_data(tmp_path):
    data_dir = tmp_path / "data" / "quotes"
    data_dir.mkdir(parents=True)
    (data_dir / "notes.txt").write_text("not data", encoding="utf-8")
    (data_dir / "archive.json").mkdir()

    outcome = resolve_latest_output("quotes", tmp_path, data_dir)

    assert outcome.data is None
    assert not outcome.has_data
    assert outcome.message == NO_DATA_FILES_MESSAGE


def test_latest_is_lexicographic_for_iso_dates(tmp_path):
    data_dir = tmp_path / "data" / "quotes"
    data_dir.mkdir(parents=True)
    _write(data_dir / "2024-01-02.json", {"day": 2})
    _write(data_dir / "2024-01-10.json", {"day": 10})

    outcome = resolve_latest_output("quotes", tmp_path, data_dir)

    assert outcome.data == {"day": 10}
    assert outcome.data_file == data_dir / "2024-01-10.json"
    assert "2024-01-10.json" in outcome.message


def test_latest_uses_string_order_not_numeric_or_mtime(tmp_path):
    data_dir = tmp_path / "data" / "counter"
    data_dir.mkdir(parents=True)
    _write(data_dir / "9.json", {"run": 9})
    _write(data_dir / "10.json", {"run": 10})
    # Make the lexicographic winner the oldest file on disk.
    os.utime(data_dir / "9.json", (1_000_000, 1_000_000))

    assert data_files_newest_first(data_dir, (".json",)) == ["9.json", "10.json"]
    outcome = resolve_latest_output("counter", tmp_path, data_dir)
    assert outcome.data == {"run": 9}


def test_corrupt_latest_file_is_distinct_from_no_output(tmp_path):
    data_dir = tmp_path / "data" / "broken"
    data_dir.mkdir(parents=True)
    _write(data_dir / "a.json", {"ok": True})
    (data_dir / "b.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(CorruptOutputError) as excinfo:
        resolve_latest_output("broken", tmp_path, data_dir)

    assert excinfo.value.path == data_dir / "b.json"


def test_deeply_nested_output_is_reported_as_corrupt(tmp_path):
    data_dir = tmp_path / "data" / "nested"
    data_dir.mkdir(parents=True)
    (data_dir / "out.json").write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

    with pytest.raises(CorruptOutputError) as excinfo:
        resolve_latest_output("nested", tmp_path, data_dir)

    assert excinfo.value.path == data_dir / "out.json"
