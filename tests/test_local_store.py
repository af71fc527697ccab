import json

from askiep.client.local_store import LocalKeys, LocalStore


def test_values_survive_reload(tmp_path):
    path = tmp_path / "cache.json"
    store = LocalStore(path)
    store.set(LocalKeys.PROFILE, {"id": "p1", "name": "Alex"})

    reloaded = LocalStore(path)

    assert reloaded.get(LocalKeys.PROFILE) == {"id": "p1", "name": "Alex"}
    assert json.loads(path.read_text())[LocalKeys.PROFILE]["name"] == "Alex"


def test_get_returns_a_copy():
    store = LocalStore()
    store.set(LocalKeys.PROFILE, {"name": "Alex"})

    store.get(LocalKeys.PROFILE)["name"] = "Changed"

    assert store.get(LocalKeys.PROFILE)["name"] == "Alex"


def test_add_stamps_local_records_newest_first():
    store = LocalStore()
    first = store.add(LocalKeys.LETTERS, {"child_id": "c1", "title": "A"}, stamp_fields=("last_edited",))
    second = store.add(LocalKeys.LETTERS, {"child_id": "c1", "title": "B"})

    assert first["id"].startswith("local-")
    assert first["last_edited"] == first["created_at"]
    assert [item["title"] for item in store.for_child(LocalKeys.LETTERS, "c1")] == ["B", "A"]
    assert second["local_only"] is True


def test_replace_for_child_keeps_other_children():
    store = LocalStore()
    store.set(LocalKeys.DOCUMENTS, [{"child_id": "c1", "id": "old"}, {"child_id": "c2", "id": "x"}])

    store.replace_for_child(LocalKeys.DOCUMENTS, "c1", [{"child_id": "c1", "id": "new"}])

    assert [item["id"] for item in store.list(LocalKeys.DOCUMENTS)] == ["new", "x"]


def test_unreadable_file_starts_empty(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{not json")

    assert LocalStore(path).get(LocalKeys.PROFILE) is None


def test_failed_write_is_logged_not_raised(tmp_path, caplog):
    # A directory where the file should be makes every flush fail
    path = tmp_path / "cache.json"
    path.mkdir()
    store = LocalStore(path)

    store.set(LocalKeys.PROFILE, {"name": "Alex"})

    assert store.get(LocalKeys.PROFILE) == {"name": "Alex"}
    assert "Local store write failed" in caplog.text
