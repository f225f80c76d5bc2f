# storefront/repositories/collection_repo.py
import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from storefront.repositories.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class CollectionRepository(Generic[T]):
    """
    Data access for a list of records stored as one JSON array under one key.

    Responsibilities:
      - Pure storage operations (load, save, lookup by identity)
      - No business rules (merging, toggling, uniqueness errors)

    Load policy: a missing, unparsable or non-array value is an empty
    collection; entries that fail record validation or repeat an identity
    already seen are dropped (and logged). Nothing here raises for bad data.
    """

    model: type[T]

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    # ----- hooks -----

    def identity(self, record: T) -> Any:
        """Identity key used to keep one record per entity."""
        return getattr(record, "id")

    def normalize_key(self, ident: Any) -> Any:
        """Bring a caller-supplied identity to the stored form."""
        return ident

    def dump(self, record: T) -> dict:
        return record.model_dump()

    # ----- reads -----

    def list_all(self) -> list[T]:
        raw = self.store.get(self.key, [])
        if not isinstance(raw, list):
            logger.warning("Value under %r is not a list; treating as empty", self.key)
            return []

        records: list[T] = []
        seen: set = set()
        for entry in raw:
            try:
                record = self.model.model_validate(entry)
            except ValidationError as e:
                logger.warning(
                    "Dropping malformed %s under %r: %s",
                    self.model.__name__,
                    self.key,
                    e.errors()[0]["msg"] if e.errors() else e,
                )
                continue
            ident = self.identity(record)
            if ident in seen:
                logger.warning("Dropping duplicate %s %r under %r", self.model.__name__, ident, self.key)
                continue
            seen.add(ident)
            records.append(record)
        return records

    def get(self, ident: Any) -> T | None:
        """Return the record with this identity, or None if not found."""
        ident = self.normalize_key(ident)
        for record in self.list_all():
            if self.identity(record) == ident:
                return record
        return None

    def count(self) -> int:
        return len(self.list_all())

    # ----- writes -----

    def save(self, records: list[T]) -> None:
        """Replace the whole collection."""
        self.store.set(self.key, [self.dump(r) for r in records])

    def clear(self) -> None:
        self.store.remove(self.key)
