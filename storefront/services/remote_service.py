# storefront/services/remote_service.py
import asyncio
from collections.abc import Awaitable, Callable

from storefront.core.config import get_settings
from storefront.models.user import UserRecord
from storefront.services.credential_service import CredentialService

Sleep = Callable[[float], Awaitable[None]]


class MockRemoteService:
    """
    Stand-in for a remote auth backend.

    Each call awaits its own fixed delay, then runs the credential operation
    and returns its result (or raises its error) unchanged. The delay is the
    only suspension point: the credential operation itself runs without
    interleaving once the delay has elapsed.

    The uniqueness check and the append happen in the same step after the
    delay, so two concurrent register() calls for the same email resolve
    in delay order: the first creates the account, the second raises
    ConflictError. There is no lock; a credential service that suspended
    between reading and writing the user list would lose that property.

    Args:
        credentials: the local credential service being wrapped.
        delay: seconds before register/authenticate resolve
            (default Settings.API_DELAY_SECONDS).
        list_delay: seconds before list_users resolves
            (default Settings.LIST_USERS_DELAY_SECONDS).
        sleep: awaitable used to wait; tests inject a fake.
    """

    def __init__(
        self,
        credentials: CredentialService,
        delay: float | None = None,
        list_delay: float | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        if delay is None or list_delay is None:
            settings = get_settings()
            delay = settings.API_DELAY_SECONDS if delay is None else delay
            list_delay = settings.LIST_USERS_DELAY_SECONDS if list_delay is None else list_delay
        self.credentials = credentials
        self.delay = delay
        self.list_delay = list_delay
        self.sleep = sleep

    async def register(self, name: str, email: str, password: str) -> UserRecord:
        await self.sleep(self.delay)
        return self.credentials.register(name, email, password)

    async def authenticate(self, email: str, password: str) -> UserRecord:
        await self.sleep(self.delay)
        return self.credentials.authenticate(email, password)

    async def list_users(self) -> list[UserRecord]:
        await self.sleep(self.list_delay)
        return self.credentials.list_users()
