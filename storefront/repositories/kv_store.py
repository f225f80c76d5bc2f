# storefront/repositories/kv_store.py
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from storefront.core.exceptions import StorageError
from storefront.models.kv_entry import KVEntry

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Synchronous key-value store holding whole JSON values under string keys.

    Contract:
      - get(key, default): parsed value, or `default` when the key is
        missing, stores JSON null, or holds text that fails to parse
      - set(key, value): serialize and store; all-or-nothing
      - remove(key): delete; no-op if absent

    Only a failure of the storage medium itself raises (StorageError).
    Subclasses implement the raw text operations.
    """

    # ----- raw text access (implemented by subclasses) -----

    @abstractmethod
    def _read(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> list[str]:
        raise NotImplementedError

    # ----- public operations -----

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._read(key)
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Stored value under %r is not valid JSON; using default", key)
            return default
        if value is None:
            return default
        return value

    def set(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for {key!r} is not JSON-serializable: {e}") from e
        self._write(key, raw)

    def remove(self, key: str) -> None:
        self._delete(key)

    def __contains__(self, key: str) -> bool:
        return self._read(key) is not None


class MemoryKeyValueStore(KeyValueStore):
    """
    In-process store, used as the injectable fake in unit tests.

    Values are kept as JSON text so reads behave exactly like the durable
    store (callers always receive fresh copies).
    """

    def __init__(self, data: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(data or {})

    def _read(self, key: str) -> str | None:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SQLKeyValueStore(KeyValueStore):
    """
    Durable store over the `kv_entries` table.

    Every operation runs in its own session and transaction, so a failed
    write leaves the previous value untouched.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _fail(self, action: str, key: str | None, exc: SQLAlchemyError) -> StorageError:
        logger.error("Storage %s failed for key %r: %s", action, key, exc)
        return StorageError(f"Storage {action} failed: {exc}")

    def _read(self, key: str) -> str | None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise self._fail("read", key, e) from e

    def _write(self, key: str, raw: str) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, key)
                if entry is None:
                    entry = KVEntry(key=key, value=raw)
                else:
                    entry.value = raw
                    entry.updated_at = datetime.now(timezone.utc)
                session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            raise self._fail("write", key, e) from e

    def _delete(self, key: str) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(KVEntry, key)
                if entry is not None:
                    session.delete(entry)
                    session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", key, e) from e

    def keys(self) -> list[str]:
        try:
            with Session(self.engine) as session:
                return list(session.exec(select(KVEntry.key)).all())
        except SQLAlchemyError as e:
            raise self._fail("scan", None, e) from e
