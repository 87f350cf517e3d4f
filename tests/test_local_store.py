"""Tests for LocalStore and its backends."""

import json

import pytest

from genesis_tracker.errors import StorageWriteError
from genesis_tracker.storage.local import FileBackend, LocalStore, MemoryBackend
from genesis_tracker.storage.namespaces import MIGRATED_NAMESPACES, Namespace


class TestRead:
    """Tests for reading namespaces."""

    def test_absent_namespace_reads_empty(self, local_store):
        assert local_store.read(Namespace.HABITS) == []
        assert local_store.read_object(Namespace.PROFILE) is None
        assert not local_store.has(Namespace.HABITS)

    def test_malformed_json_reads_empty(self):
        """Test corrupt data never raises on read."""
        store = LocalStore(MemoryBackend({"habits": "{not json"}))

        assert store.read(Namespace.HABITS) == []
        assert store.read_object(Namespace.HABITS) is None

    def test_non_collection_value_reads_empty(self):
        store = LocalStore(MemoryBackend({"habits": "42"}))

        assert store.read(Namespace.HABITS) == []

    def test_single_object_reads_as_list(self):
        """Test a stored object is returned as a one-element list."""
        store = LocalStore(MemoryBackend({"personalData": json.dumps({"name": "Sam"})}))

        assert store.read(Namespace.PROFILE) == [{"name": "Sam"}]
        assert store.read_object(Namespace.PROFILE) == {"name": "Sam"}

    def test_non_object_entries_are_dropped(self):
        """Test array entries that are not records never reach callers."""
        store = LocalStore(MemoryBackend({"habits": json.dumps([1, {"id": "h1"}, "x"])}))

        assert store.read(Namespace.HABITS) == [{"id": "h1"}]

    def test_upsert_over_non_object_entries(self):
        store = LocalStore(MemoryBackend({"habits": "[1, 2]"}))
        store.upsert_by_key(Namespace.HABITS, {"id": "h1"}, key_fn=lambda r: r.get("id"))

        assert store.read(Namespace.HABITS) == [{"id": "h1"}]

    def test_enum_and_string_keys_are_equivalent(self, local_store):
        local_store.write("habits", [{"id": "h1"}])

        assert local_store.read(Namespace.HABITS) == [{"id": "h1"}]
        assert local_store.backend.keys() == ["habits"]


class TestWrite:
    """Tests for writing namespaces."""

    def test_write_replaces_namespace(self, local_store):
        local_store.write(Namespace.HABITS, [{"id": "h1"}, {"id": "h2"}])
        local_store.write(Namespace.HABITS, [{"id": "h3"}])

        assert local_store.read(Namespace.HABITS) == [{"id": "h3"}]

    def test_namespaces_are_isolated(self, local_store):
        """Test writing one namespace leaves the others untouched."""
        local_store.write(Namespace.HABITS, [{"id": "h1"}])
        local_store.write(Namespace.SUPPLEMENTS, [{"id": "s1"}])

        assert local_store.read(Namespace.HABITS) == [{"id": "h1"}]
        assert local_store.read(Namespace.SUPPLEMENTS) == [{"id": "s1"}]

    def test_unserializable_value_raises(self, local_store):
        with pytest.raises(StorageWriteError):
            local_store.write(Namespace.HABITS, [{"id": object()}])

    def test_upsert_by_key_is_idempotent(self, local_store):
        """Test upserting the same key twice keeps one record."""
        key = lambda r: r["date"]  # noqa: E731
        local_store.upsert_by_key(Namespace.BODY_MEASUREMENTS, {"date": "2024-03-01", "weight": 80}, key)
        local_store.upsert_by_key(Namespace.BODY_MEASUREMENTS, {"date": "2024-03-01", "weight": 81}, key)

        assert local_store.read(Namespace.BODY_MEASUREMENTS) == [{"date": "2024-03-01", "weight": 81}]

    def test_upsert_by_key_sorts(self, local_store):
        key = lambda r: r["date"]  # noqa: E731
        for day in ("2024-03-03", "2024-03-01", "2024-03-02"):
            local_store.upsert_by_key(
                Namespace.NUTRITION, {"date": day}, key, sort_key=lambda r: r["date"]
            )

        dates = [r["date"] for r in local_store.read(Namespace.NUTRITION)]
        assert dates == ["2024-03-01", "2024-03-02", "2024-03-03"]

    def test_remove(self, local_store):
        local_store.write(Namespace.HABITS, [{"id": "h1"}, {"id": "h2"}])

        assert local_store.remove(Namespace.HABITS, lambda r: r["id"] == "h1") == 1
        assert local_store.remove(Namespace.HABITS, lambda r: r["id"] == "missing") == 0
        assert local_store.read(Namespace.HABITS) == [{"id": "h2"}]

    def test_clear(self, local_store):
        """Test clearing deletes the keys outright."""
        local_store.write(Namespace.HABITS, [{"id": "h1"}])
        local_store.write(Namespace.SESSION, {"userId": "u1"})
        local_store.clear(MIGRATED_NAMESPACES)

        assert not local_store.has(Namespace.HABITS)
        assert local_store.has(Namespace.SESSION)


class TestExportImport:
    """Tests for JSON export and import."""

    def test_export_then_import(self, local_store):
        local_store.write(Namespace.HABITS, [{"id": "h1", "name": "Read"}])
        local_store.write_object(Namespace.PROFILE, {"name": "Sam"})
        document = local_store.export_json(MIGRATED_NAMESPACES)

        other = LocalStore()
        written = other.import_json(document)

        assert set(written) == {"habits", "personalData"}
        assert other.read(Namespace.HABITS) == [{"id": "h1", "name": "Read"}]
        assert other.read_object(Namespace.PROFILE) == {"name": "Sam"}

    def test_export_skips_corrupt(self):
        store = LocalStore(MemoryBackend({"habits": "{oops"}))

        assert json.loads(store.export_json([Namespace.HABITS])) == {}

    def test_import_skips_keys_outside_namespaces(self, local_store):
        """Test an import cannot plant a session or other unlisted keys."""
        document = json.dumps(
            {"session": {"userId": "someone-else"}, "habits": [{"id": "h1", "name": "Read"}]}
        )
        written = local_store.import_json(document, MIGRATED_NAMESPACES)

        assert written == ["habits"]
        assert local_store.read_object(Namespace.SESSION) is None

    def test_import_defaults_to_tracking_namespaces(self, local_store):
        written = local_store.import_json(json.dumps({"body-metrics-storage": {"height": 180}}))

        assert written == []
        assert not local_store.has(Namespace.BODY_METRICS)

    @pytest.mark.parametrize("text", ["not json", "[1, 2]", '{"habits": 5}'])
    def test_import_rejects_invalid(self, local_store, text):
        with pytest.raises(ValueError, match="Invalid data format"):
            local_store.import_json(text)


class TestFileBackend:
    """Tests for the file-backed store."""

    def test_persists_across_instances(self, tmp_path):
        LocalStore.open(tmp_path / "local").write(Namespace.HABITS, [{"id": "h1"}])

        reopened = LocalStore.open(tmp_path / "local")
        assert reopened.read(Namespace.HABITS) == [{"id": "h1"}]
        assert (tmp_path / "local" / "habits.json").exists()

    def test_remove_and_keys(self, tmp_path):
        backend = FileBackend(tmp_path)
        backend.set_item("habits", "[]")
        backend.set_item("supplements", "[]")
        backend.remove_item("habits")
        backend.remove_item("never-written")

        assert backend.keys() == ["supplements"]

    def test_no_temp_files_left(self, tmp_path):
        backend = FileBackend(tmp_path)
        backend.set_item("habits", "[]")

        assert [p.name for p in tmp_path.iterdir()] == ["habits.json"]

    def test_undecodable_file_reads_empty(self, tmp_path):
        """Test a binary or half-written file reads as an empty namespace."""
        (tmp_path / "habits.json").write_bytes(b"\xff\xfe[garbage")
        store = LocalStore.open(tmp_path)

        assert store.read(Namespace.HABITS) == []
        assert store.read_object(Namespace.HABITS) is None
        assert store.has(Namespace.HABITS)

        store.write(Namespace.HABITS, [{"id": "h1"}])
        assert store.read(Namespace.HABITS) == [{"id": "h1"}]

    def test_rejects_path_like_keys(self, tmp_path):
        with pytest.raises(ValueError):
            FileBackend(tmp_path).set_item("../escape", "[]")
