"""Integration tests for DatabaseManager."""

from __future__ import annotations

from pathlib import Path

import pytest

from record_store.application import DatabaseManager
from record_store.domain.entities import Schema
from record_store.domain.exceptions import (
    ConflictError,
    DataError,
    InvalidNameError,
    NotFoundError,
    SchemaError,
)
from record_store.infrastructure.config import Config, StorageConfig, ValidationConfig
from record_store.infrastructure.metrics import MetricsRegistry

USER_FIELDS = {"id": "string", "age": "integer", "active": "boolean"}


@pytest.fixture
def shop(manager: DatabaseManager) -> DatabaseManager:
    """Manager with database 'shop' and collection 'users'."""
    manager.create_database("shop")
    manager.create_collection("shop", "users", USER_FIELDS, identity_field="id")
    return manager


@pytest.mark.integration
class TestUserScenario:
    """The reference user-table scenario end to end."""

    def test_write_duplicate_read(self, shop: DatabaseManager) -> None:
        assert shop.write_record("shop", "users", ["u1", "30", "true"]) == "u1"

        with pytest.raises(DataError) as exc_info:
            shop.write_record("shop", "users", ["u1", "31", "false"])
        assert exc_info.value.reason == "duplicate identity"

        assert shop.read_record("shop", "users", "u1") == ["u1", "30", "true"]
        assert shop.read_record("shop", "users", "missing") == []

    def test_type_mismatch_on_age(self, shop: DatabaseManager) -> None:
        with pytest.raises(DataError) as exc_info:
            shop.write_record("shop", "users", ["u2", "abc", "true"])

        assert exc_info.value.reason == "type mismatch"
        assert exc_info.value.field == "age"

    def test_update_and_list(self, shop: DatabaseManager) -> None:
        shop.write_record("shop", "users", ["u1", "30", "true"])
        shop.write_record("shop", "users", ["u2", "25", "false"])

        updated = shop.update_record("shop", "users", "u2", ["u2", "26", "true"])

        assert updated == ["u2", "26", "true"]
        assert shop.list_all_records("shop", "users") == [
            ["u1", "30", "true"],
            ["u2", "26", "true"],
        ]


@pytest.mark.integration
class TestRouting:
    """Name lookups at the manager and database layers."""

    def test_create_database_conflict(self, manager: DatabaseManager) -> None:
        manager.create_database("shop")
        with pytest.raises(ConflictError) as exc_info:
            manager.create_database("shop")
        assert exc_info.value.reason == "database exists"

    def test_create_collection_conflict(self, shop: DatabaseManager) -> None:
        with pytest.raises(ConflictError) as exc_info:
            shop.create_collection("shop", "users", USER_FIELDS, identity_field="id")
        assert exc_info.value.reason == "collection exists"

    @pytest.mark.parametrize(
        "call",
        [
            lambda m: m.create_collection("nope", "users", USER_FIELDS, "id"),
            lambda m: m.write_record("nope", "users", ["u1", "1", "true"]),
            lambda m: m.read_record("nope", "users", "u1"),
            lambda m: m.update_record("nope", "users", "u1", ["u1", "1", "true"]),
            lambda m: m.list_collections("nope"),
            lambda m: m.list_all_records("nope", "users"),
        ],
    )
    def test_unknown_database(self, shop: DatabaseManager, call) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            call(shop)
        assert exc_info.value.kind == "database"

    @pytest.mark.parametrize(
        "call",
        [
            lambda m: m.write_record("shop", "orders", ["o1", "1", "true"]),
            lambda m: m.read_record("shop", "orders", "o1"),
            lambda m: m.update_record("shop", "orders", "o1", ["o1", "1", "true"]),
            lambda m: m.list_all_records("shop", "orders"),
        ],
    )
    def test_unknown_collection(self, shop: DatabaseManager, call) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            call(shop)
        assert exc_info.value.kind == "collection"

    def test_update_unknown_record(self, shop: DatabaseManager) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            shop.update_record("shop", "users", "ghost", ["ghost", "1", "true"])
        assert exc_info.value.kind == "record"

    def test_listings(self, shop: DatabaseManager) -> None:
        shop.create_database("archive")
        shop.create_collection("shop", "orders", {"ref": "string", "qty": "integer"}, "ref")

        assert shop.list_databases() == {"shop", "archive"}
        assert shop.list_collections("shop") == {"users", "orders"}
        assert shop.list_collections("archive") == set()

    @pytest.mark.parametrize("name", ["", "../escape", "a b", "x/y"])
    def test_invalid_names(self, manager: DatabaseManager, name: str) -> None:
        with pytest.raises(InvalidNameError):
            manager.create_database(name)

        manager.create_database("ok")
        with pytest.raises(InvalidNameError):
            manager.create_collection("ok", name, USER_FIELDS, "id")

    def test_invalid_schema(self, manager: DatabaseManager) -> None:
        manager.create_database("shop")
        with pytest.raises(SchemaError) as exc_info:
            manager.create_collection("shop", "bad", {"id": "string", "2nd": "string"}, "id")

        assert exc_info.value.reason == "invalid field name"
        assert manager.list_collections("shop") == set()
        assert not (manager.data_dir / "shop" / "bad.csv").exists()

    def test_schema_object_accepted(self, manager: DatabaseManager, user_schema: Schema) -> None:
        manager.create_database("shop")
        manager.create_collection("shop", "users", user_schema)
        assert manager.write_record("shop", "users", ["u1", "1", "true"]) == "u1"

    def test_mapping_without_identity_field(self, manager: DatabaseManager) -> None:
        manager.create_database("shop")
        with pytest.raises(TypeError):
            manager.create_collection("shop", "users", USER_FIELDS)


@pytest.mark.integration
class TestPersistence:
    """Backing files and reopening."""

    def test_file_layout(self, shop: DatabaseManager) -> None:
        shop.write_record("shop", "users", ["u1", "30", "true"])
        shop.write_record("shop", "users", ["u2", "41", "false"])

        path = shop.data_dir / "shop" / "users.csv"
        assert path.read_text(encoding="utf-8") == "u1;30;true\nu2;41;false\n"

    def test_reopen_rebuilds_identities(self, temp_dir: Path, metrics_registry: MetricsRegistry) -> None:
        data_dir = temp_dir / "persist"
        with DatabaseManager(data_dir=data_dir, sync_mode="none", metrics=metrics_registry) as first:
            first.create_database("shop")
            first.create_collection("shop", "users", USER_FIELDS, "id")
            first.write_record("shop", "users", ["u1", "30", "true"])

        with DatabaseManager(data_dir=data_dir, sync_mode="none", metrics=metrics_registry) as second:
            second.create_database("shop")
            second.create_collection("shop", "users", USER_FIELDS, "id")

            assert second.read_record("shop", "users", "u1") == ["u1", "30", "true"]
            with pytest.raises(DataError) as exc_info:
                second.write_record("shop", "users", ["u1", "99", "false"])
            assert exc_info.value.reason == "duplicate identity"

    def test_memory_backend(self, metrics_registry: MetricsRegistry) -> None:
        with DatabaseManager(backend="memory", metrics=metrics_registry) as store:
            assert store.data_dir is None
            store.create_database("shop")
            store.create_collection("shop", "users", USER_FIELDS, "id")
            store.write_record("shop", "users", ["u1", "30", "true"])
            assert store.read_record("shop", "users", "u1") == ["u1", "30", "true"]


@pytest.mark.integration
class TestConfigAndStats:
    """Construction from config and statistics."""

    def test_from_config(self, temp_dir: Path, metrics_registry: MetricsRegistry) -> None:
        config = Config(
            storage=StorageConfig(data_dir=temp_dir / "cfg", sync_mode="none"),
            validation=ValidationConfig(sanitize_scripts=False),
        )
        with DatabaseManager.from_config(config, metrics=metrics_registry) as store:
            store.create_database("shop")
            store.create_collection("shop", "notes", {"id": "string", "body": "string"}, "id")
            store.write_record("shop", "notes", ["n1", "<script>"])

            assert store.read_record("shop", "notes", "n1") == ["n1", "<script>"]
            assert (temp_dir / "cfg" / "shop" / "notes.csv").exists()

    def test_sanitization_on_by_default(self, shop: DatabaseManager) -> None:
        with pytest.raises(DataError) as exc_info:
            shop.write_record("shop", "users", ["<script>", "1", "true"])
        assert exc_info.value.reason == "forbidden content"

    def test_stats(self, shop: DatabaseManager) -> None:
        shop.create_database("empty")
        shop.write_record("shop", "users", ["u1", "30", "true"])
        shop.write_record("shop", "users", ["u2", "31", "true"])

        stats = shop.get_stats()

        assert stats.databases == 2
        assert stats.collections == 1
        assert stats.records == 2
        assert stats.per_database == {"shop": {"users": 2}, "empty": {}}
