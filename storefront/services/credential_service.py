# storefront/services/credential_service.py
import hashlib
import hmac
import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError

from storefront.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from storefront.models.user import UserRecord
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)


def digest(password: str) -> str:
    """
    SHA-256 of the UTF-8 password, as 64 lowercase hex chars.

    Deterministic across processes and platforms. This is a fast, unsalted,
    unkeyed hash: fine for a demo store, NOT a password-hashing KDF
    (bcrypt/argon2) and unsuitable for real credentials.

    Always 64 chars, the empty password included.
    """
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CredentialService:
    """
    Registered users and password checks.

    Responsibilities:
      - enforce case-insensitive email uniqueness at registration
      - issue strictly increasing timestamp ids
      - verify a password against the stored digest

    The clock is injectable so tests can pin ids and timestamps.
    """

    digest = staticmethod(digest)

    def __init__(
        self,
        repo: UserRepository,
        clock_ms: Callable[[], int] = _epoch_ms,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.repo = repo
        self.clock_ms = clock_ms
        self.now = now
        self._last_id = 0

    # ----- internal helpers -----

    def _next_id(self, users: list[UserRecord]) -> int:
        """Current epoch ms, bumped past every id issued or stored so far."""
        floor = max([self._last_id, *(u.id for u in users)])
        candidate = self.clock_ms()
        if candidate <= floor:
            candidate = floor + 1
        self._last_id = candidate
        return candidate

    # ----- public operations -----

    def register(self, name: str, email: str, password: str) -> UserRecord:
        """
        Create a new account and persist the updated user list.

        Raises:
            ValidationError: blank email or empty password.
            ConflictError: email already registered (case-insensitive).
        """
        try:
            payload = RegisterRequest(name=name, email=email, password=password)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid registration: {e.errors()[0]['msg']}") from e

        users = self.repo.list_all()
        if any(u.email == payload.email for u in users):
            raise ConflictError()

        user = UserRecord(
            id=self._next_id(users),
            name=payload.name,
            email=payload.email,
            password_digest=digest(payload.password),
            created=self.now().isoformat(timespec="milliseconds"),
        )
        users.append(user)
        self.repo.save(users)

        logger.info("Registered user id=%s", user.id)
        return user

    def authenticate(self, email: str, password: str) -> UserRecord:
        """
        Return the account matching email + password.

        Raises:
            NotFoundError: no account for this email.
            AuthError: password digest does not match.
        """
        user = self.repo.get_by_email(email or "")
        if user is None:
            raise NotFoundError()
        if not hmac.compare_digest(digest(password), user.password_digest):
            raise AuthError()
        return user

    def find_by_email(self, email: str) -> UserRecord | None:
        return self.repo.get_by_email(email or "")

    def list_users(self) -> list[UserRecord]:
        return self.repo.list_all()
