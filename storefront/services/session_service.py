# storefront/services/session_service.py
import logging

from storefront.models.session import SessionRecord
from storefront.models.user import UserRecord
from storefront.repositories.session_repo import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """
    The current signed-in user.

    States: signed out (no record) <-> signed in (one record). Signing in
    again replaces the record wholesale; signing out deletes it. Callers
    are expected to have verified the user already (after register or
    authenticate).
    """

    def __init__(self, repo: SessionRepository):
        self.repo = repo

    def sign_in(self, user: UserRecord | SessionRecord) -> SessionRecord:
        record = user if isinstance(user, SessionRecord) else SessionRecord.from_user(user)
        self.repo.save(record)
        logger.info("Signed in user id=%s", record.id)
        return record

    def current(self) -> SessionRecord | None:
        return self.repo.get()

    @property
    def signed_in(self) -> bool:
        return self.current() is not None

    def sign_out(self) -> None:
        self.repo.delete()
        logger.info("Signed out")
