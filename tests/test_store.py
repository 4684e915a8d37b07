import json

import pytest

from services.store import JsonStore, Resource
from utils.errors import StorageAccessError


def test_load_missing_returns_default(store) -> None:
    assert store.load(Resource.REPEATS, []) == []
    assert store.load(Resource.FAIL_COUNTS, {"x": 1}) == {"x": 1}


def test_save_then_load_is_pretty_printed(store, tmp_path) -> None:
    store.save(Resource.FAIL_COUNTS, {"42": 2})

    path = tmp_path / "failCounts.json"
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert '\n  "42": 2' in text
    assert store.load(Resource.FAIL_COUNTS, {}) == {"42": 2}


def test_file_names_match_resources(store, tmp_path) -> None:
    assert store.path_for(Resource.REPEATS) == tmp_path.resolve() / "repeats.json"
    assert store.path_for(Resource.FAIL_COUNTS) == tmp_path.resolve() / "failCounts.json"
    assert store.path_for(Resource.COMMAND_LOGS) == tmp_path.resolve() / "commandLogs.json"


def test_string_names_and_allowed_paths_resolve(store, tmp_path) -> None:
    assert store.path_for("repeats") == store.path_for(Resource.REPEATS)
    assert store.path_for("commandLogs.json") == store.path_for(Resource.COMMAND_LOGS)
    assert store.path_for(str(tmp_path / "failCounts.json")) == store.path_for(
        Resource.FAIL_COUNTS
    )


@pytest.mark.parametrize(
    "resource",
    ["config.json", "../repeats.json", "/etc/passwd", "sub/repeats.json", ""],
)
def test_disallowed_resources_raise(store, resource) -> None:
    with pytest.raises(StorageAccessError) as exc:
        store.load(resource, None)
    assert str(exc.value) == "Access to this file is not allowed."

    with pytest.raises(StorageAccessError):
        store.save(resource, {})


def test_corrupt_document_falls_back_to_default(store, tmp_path) -> None:
    (tmp_path / "repeats.json").write_text("{not json", encoding="utf-8")
    assert store.load(Resource.REPEATS, []) == []


def test_save_replaces_whole_document_and_leaves_no_temp_files(store, tmp_path) -> None:
    store.save(Resource.COMMAND_LOGS, [{"command": "say"}, {"command": "status"}])
    store.save(Resource.COMMAND_LOGS, [{"command": "summarize"}])

    data = json.loads((tmp_path / "commandLogs.json").read_text(encoding="utf-8"))
    assert data == [{"command": "summarize"}]
    assert [p.name for p in tmp_path.iterdir()] == ["commandLogs.json"]


def test_save_creates_data_dir(tmp_path) -> None:
    nested = tmp_path / "data" / "bot"
    store = JsonStore(nested)
    store.save(Resource.REPEATS, [])
    assert (nested / "repeats.json").exists()
