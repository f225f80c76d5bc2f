# storefront/repositories/session_repo.py
import logging

from pydantic import ValidationError

from storefront.models.session import SessionRecord
from storefront.repositories.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class SessionRepository:
    """
    Data access for the single current-session record.

    Same load policy as the collections: a missing, unparsable or invalid
    value reads as "no session" rather than raising.
    """

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    def get(self) -> SessionRecord | None:
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            return SessionRecord.model_validate(raw)
        except ValidationError:
            logger.warning("Stored session under %r is malformed; treating as signed out", self.key)
            return None

    def save(self, record: SessionRecord) -> None:
        self.store.set(self.key, record.model_dump())

    def delete(self) -> None:
        self.store.remove(self.key)
