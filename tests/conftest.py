"""Shared fixtures: every service is built over an in-memory store."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from storefront.core.config import Settings
from storefront.main import Storefront
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.favorites_repo import FavoritesRepository
from storefront.repositories.kv_store import MemoryKeyValueStore
from storefront.repositories.session_repo import SessionRepository
from storefront.repositories.user_repo import UserRepository
from storefront.services.cart_service import CartService
from storefront.services.credential_service import CredentialService
from storefront.services.favorites_service import FavoritesService
from storefront.services.remote_service import MockRemoteService
from storefront.services.session_service import SessionService

FROZEN_MS = 1_700_000_000_000


class RecordingSleep:
    """Sleep double that records requested delays and yields once."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)
        await asyncio.sleep(0)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def cart(store, settings) -> CartService:
    return CartService(CartRepository(store, settings.CART_KEY))


@pytest.fixture
def favorites(store, settings) -> FavoritesService:
    return FavoritesService(FavoritesRepository(store, settings.FAVORITES_KEY))


@pytest.fixture
def credentials(store, settings) -> CredentialService:
    return CredentialService(
        UserRepository(store, settings.USERS_KEY),
        clock_ms=lambda: FROZEN_MS,
        now=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def session(store, settings) -> SessionService:
    return SessionService(SessionRepository(store, settings.SESSION_KEY))


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def remote(credentials, sleeper) -> MockRemoteService:
    return MockRemoteService(credentials, delay=0.42, list_delay=0.12, sleep=sleeper)


@pytest.fixture
def shop(settings) -> Storefront:
    return Storefront.in_memory(settings)
