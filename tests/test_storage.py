from pathlib import Path

import pytest

from quizdesk.storage import DatabaseStorage, JsonFileStorage, MemoryStorage, build_storage


@pytest.fixture(params=["memory", "json", "database"])
def backend(request, tmp_path: Path):
    if request.param == "memory":
        yield MemoryStorage()
    elif request.param == "json":
        yield JsonFileStorage(tmp_path / "progress")
    else:
        storage = DatabaseStorage(f"sqlite:///{tmp_path / 'db' / 'quizdesk.db'}")
        yield storage
        storage.dispose()


def test_missing_key_is_none(backend) -> None:
    assert backend.get("quiz_progress_nothing") is None


def test_set_get_overwrite_and_clear(backend) -> None:
    backend.set("quiz_progress_a", '{"timeLeft":10}')
    assert backend.get("quiz_progress_a") == '{"timeLeft":10}'
    backend.set("quiz_progress_a", '{"timeLeft":9}')
    assert backend.get("quiz_progress_a") == '{"timeLeft":9}'
    backend.clear("quiz_progress_a")
    assert backend.get("quiz_progress_a") is None
    backend.clear("quiz_progress_a")


def test_keys_filter_by_prefix(backend) -> None:
    backend.set("quiz_progress_b", "{}")
    backend.set("quiz_progress_a", "{}")
    backend.set("token", "secret")
    assert backend.keys("quiz_progress_") == ["quiz_progress_a", "quiz_progress_b"]
    assert "token" in backend.keys()


def test_database_prefix_is_not_a_pattern(tmp_path: Path) -> None:
    storage = DatabaseStorage(f"sqlite:///{tmp_path / 'quizdesk.db'}")
    storage.set("quiz_progress_x", "{}")
    storage.set("quizXprogress_y", "{}")
    assert storage.keys("quiz_progress_") == ["quiz_progress_x"]
    storage.dispose()


def test_json_storage_writes_one_file_per_key(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path)
    storage.set("quiz_progress_a", "{}")
    assert (tmp_path / "quiz_progress_a.json").read_text(encoding="utf-8") == "{}"
    assert not list(tmp_path.glob(".*.tmp"))


def test_json_storage_rejects_path_traversal(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path)
    with pytest.raises(ValueError):
        storage.set("../escape", "{}")


def test_build_storage_by_name(tmp_path: Path) -> None:
    assert isinstance(build_storage("memory"), MemoryStorage)
    assert isinstance(build_storage("json", directory=tmp_path), JsonFileStorage)
    with pytest.raises(ValueError):
        build_storage("redis")
