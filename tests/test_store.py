"""
Tests for the flat-file store.
"""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from blog_api.core.errors import StorageError
from blog_api.db.store import JsonFileStore, max_id
from blog_api.schemas.user import UserCreate
from blog_api.services.user_service import UserService


def test_load_missing_file_returns_empty(store: JsonFileStore) -> None:
    """A collection that was never saved loads as empty."""
    assert store.load("users") == []
    assert not store.exists("users")


def test_save_then_load(store: JsonFileStore) -> None:
    """Saved records come back unchanged, non-ASCII included."""
    records = [{"id": 1, "name": "Анна", "email": "anna@example.com"}]
    store.save("users", records)

    assert store.exists("users")
    assert store.load("users") == records


def test_save_replaces_whole_collection(store: JsonFileStore) -> None:
    store.save("posts", [{"id": 1}, {"id": 2}])
    store.save("posts", [{"id": 3}])
    assert store.load("posts") == [{"id": 3}]


def test_save_leaves_no_temp_files(store: JsonFileStore) -> None:
    store.save("comments", [{"id": 1}])
    assert [p.name for p in store.base_path.iterdir()] == ["comments.json"]


def test_resources_are_independent(store: JsonFileStore) -> None:
    store.save("users", [{"id": 1}])
    assert store.load("posts") == []


def test_malformed_json_raises(store: JsonFileStore) -> None:
    store.base_path.mkdir(parents=True)
    store.path_for("users").write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        store.load("users")


def test_non_array_document_raises(store: JsonFileStore) -> None:
    store.base_path.mkdir(parents=True)
    store.path_for("users").write_text(json.dumps({"id": 1}), encoding="utf-8")

    with pytest.raises(StorageError):
        store.load("users")


def test_unserializable_record_raises(store: JsonFileStore) -> None:
    with pytest.raises(StorageError):
        store.save("users", [{"id": object()}])


def test_write_failure_raises(tmp_path) -> None:
    """A data path that is a regular file cannot hold collections."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStore(blocker / "data")

    with pytest.raises(StorageError):
        store.save("users", [])


def test_max_id() -> None:
    assert max_id([]) == 0
    assert max_id([{"id": 4}, {"id": 2}]) == 4
    assert max_id([{"id": "x"}, {"name": "no id"}]) == 0


def test_allocate_id_counts_from_one(store: JsonFileStore) -> None:
    assert store.allocate_id("posts", []) == 1
    assert store.allocate_id("posts", []) == 2
    assert store.last_id("posts") == 2
    assert store.last_id("comments") == 0


def test_allocate_id_skips_ids_already_in_file(store: JsonFileStore) -> None:
    """A hand-seeded file with no counter yet continues after its largest id."""
    assert store.allocate_id("users", [{"id": 4}, {"id": 2}]) == 5


def test_allocate_id_never_reuses_deleted_highest_id(store: JsonFileStore) -> None:
    first = UserService.create(store, UserCreate(name="A", email="a@example.com"))
    second = UserService.create(store, UserCreate(name="B", email="b@example.com"))
    UserService.delete(store, second.id)

    third = UserService.create(store, UserCreate(name="C", email="c@example.com"))

    assert third.id > second.id > first.id
    assert json.loads(store.meta_path_for("users").read_text(encoding="utf-8")) == {"lastId": third.id}


def test_malformed_counter_raises(store: JsonFileStore) -> None:
    store.base_path.mkdir(parents=True)
    store.meta_path_for("users").write_text(json.dumps({"lastId": "7"}), encoding="utf-8")

    with pytest.raises(StorageError):
        store.allocate_id("users", [])


def test_ping(store: JsonFileStore) -> None:
    assert store.ping() is True
    assert store.base_path.is_dir()


def test_concurrent_creates_keep_every_user(store: JsonFileStore) -> None:
    """Parallel read-modify-write cycles on one resource lose nothing."""

    def create(i: int) -> int:
        user = UserService.create(store, UserCreate(name=f"User {i}", email=f"u{i}@example.com"))
        return user.id

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(create, range(40)))

    assert len(set(ids)) == 40
    assert len(store.load("users")) == 40
