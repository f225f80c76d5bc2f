"""Tests for the key-value store implementations."""

from __future__ import annotations

import pytest

from storefront.core.exceptions import StorageError
from storefront.database import create_db_and_tables, make_engine
from storefront.repositories.kv_store import KeyValueStore, MemoryKeyValueStore, SQLKeyValueStore


@pytest.fixture
def sql_store(tmp_path) -> SQLKeyValueStore:
    engine = make_engine(f"sqlite:///{tmp_path / 'kv.db'}")
    create_db_and_tables(engine)
    return SQLKeyValueStore(engine)


@pytest.fixture(params=["memory", "sql"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return MemoryKeyValueStore()
    engine = make_engine("sqlite://")
    create_db_and_tables(engine)
    return SQLKeyValueStore(engine)


def test_missing_key_returns_default(any_store) -> None:
    assert any_store.get("ecom_cart") is None
    assert any_store.get("ecom_cart", []) == []
    assert "ecom_cart" not in any_store


def test_set_then_get_returns_parsed_value(any_store) -> None:
    any_store.set("ecom_cart", [{"id": "p1", "qty": 2}])

    assert any_store.get("ecom_cart", []) == [{"id": "p1", "qty": 2}]
    assert any_store.keys() == ["ecom_cart"]


def test_set_overwrites_whole_value(any_store) -> None:
    any_store.set("k", {"a": 1})
    any_store.set("k", {"b": 2})

    assert any_store.get("k") == {"b": 2}


def test_remove_deletes_key_and_is_idempotent(any_store) -> None:
    any_store.set("k", [1])
    any_store.remove("k")
    any_store.remove("k")

    assert any_store.get("k", []) == []
    assert any_store.keys() == []


def test_stored_null_reads_as_default(any_store) -> None:
    any_store.set("ecom_currentUser", None)

    assert any_store.get("ecom_currentUser", "absent") == "absent"


def test_unserializable_value_raises_and_keeps_previous(any_store) -> None:
    any_store.set("k", [1, 2])

    with pytest.raises(StorageError):
        any_store.set("k", {"bad": object()})

    assert any_store.get("k") == [1, 2]


def test_corrupt_json_falls_back_to_default() -> None:
    store = MemoryKeyValueStore({"ecom_cart": "[{not json", "ecom_currentUser": "{"})

    assert store.get("ecom_cart", []) == []
    assert store.get("ecom_currentUser") is None


def test_reads_return_independent_copies() -> None:
    store = MemoryKeyValueStore()
    store.set("k", [{"id": "p1"}])

    first = store.get("k")
    first.append({"id": "p2"})

    assert store.get("k") == [{"id": "p1"}]


def test_sql_store_survives_reopen(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'shop.db'}"
    engine = make_engine(url)
    create_db_and_tables(engine)
    SQLKeyValueStore(engine).set("ecom_favorites", [{"id": "f1", "title": "Tart"}])
    engine.dispose()

    reopened = make_engine(url)
    create_db_and_tables(reopened)

    assert SQLKeyValueStore(reopened).get("ecom_favorites") == [{"id": "f1", "title": "Tart"}]


def test_sql_store_keeps_unicode(sql_store) -> None:
    sql_store.set("k", {"title": "Bánh mì"})

    assert sql_store.get("k") == {"title": "Bánh mì"}


def test_unavailable_medium_raises_storage_error(tmp_path) -> None:
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'kv.db'}")
    store = SQLKeyValueStore(engine)

    with pytest.raises(StorageError):
        store.get("ecom_cart")

    with pytest.raises(StorageError):
        store.set("ecom_cart", [])


def test_corrupt_value_is_logged(caplog) -> None:
    store = MemoryKeyValueStore({"ecom_users": "not json"})

    with caplog.at_level("WARNING", logger="storefront.repositories.kv_store"):
        assert store.get("ecom_users", []) == []

    assert "ecom_users" in caplog.text


def test_incomplete_store_subclass_cannot_be_created() -> None:
    class WriteOnlyStore(KeyValueStore):
        def _write(self, key: str, raw: str) -> None:
            pass

    with pytest.raises(TypeError):
        WriteOnlyStore()
