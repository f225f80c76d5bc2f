# storefront/repositories/user_repo.py
from storefront.models.user import UserRecord
from storefront.repositories.collection_repo import CollectionRepository


class UserRepository(CollectionRepository[UserRecord]):
    """
    Data access layer for registered users.

    Responsibilities:
      - Load/save the append-only user list
      - Lookup by email (already lower-cased on every record)
    """

    model = UserRecord

    def identity(self, record: UserRecord) -> str:
        return record.email

    def dump(self, record: UserRecord) -> dict:
        return record.to_storage()

    def normalize_key(self, ident):
        return ident.strip().lower() if isinstance(ident, str) else ident

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by email (case-insensitive), or None if not found."""
        return self.get(email)

    def max_id(self) -> int:
        return max((u.id for u in self.list_all()), default=0)
