"""Tests for registration, authentication and the password digest."""

from __future__ import annotations

import hashlib

import pytest

from storefront.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from storefront.repositories.kv_store import MemoryKeyValueStore
from storefront.repositories.user_repo import UserRepository
from storefront.services.credential_service import CredentialService, digest

FROZEN_MS = 1_700_000_000_000


def test_digest_is_deterministic_sha256_hex() -> None:
    assert digest("secret1") == digest("secret1")
    assert digest("secret1") == hashlib.sha256(b"secret1").hexdigest()
    assert len(digest("secret1")) == 64
    assert digest("secret1") == digest("secret1").lower()


def test_digest_differs_per_password() -> None:
    assert digest("secret1") != digest("secret2")
    assert digest("pässwörd") == hashlib.sha256("pässwörd".encode("utf-8")).hexdigest()


def test_digest_of_empty_password_is_fixed_length_hex() -> None:
    assert digest("") == hashlib.sha256(b"").hexdigest()
    assert len(digest("")) == 64


def test_register_creates_normalized_record(credentials: CredentialService) -> None:
    user = credentials.register("  Ana ", "Ana@X.com", "secret1")

    assert user.id == FROZEN_MS
    assert user.name == "Ana"
    assert user.email == "ana@x.com"
    assert user.password_digest == digest("secret1")
    assert user.created == "2024-05-01T12:00:00.000+00:00"
    assert credentials.list_users() == [user]


def test_register_persists_digest_not_password(
    credentials: CredentialService, store: MemoryKeyValueStore
) -> None:
    credentials.register("A", "a@x.com", "secret1")

    stored = store.get("ecom_users")
    assert stored[0]["passwordDigest"] == digest("secret1")
    assert "secret1" not in str(stored)


def test_duplicate_email_is_case_insensitive(credentials: CredentialService) -> None:
    credentials.register("A", "a@x.com", "secret1")

    with pytest.raises(ConflictError) as exc:
        credentials.register("B", "A@X.com", "other")

    assert exc.value.code == "exists"
    assert len(credentials.list_users()) == 1


def test_ids_strictly_increase_with_frozen_clock(credentials: CredentialService) -> None:
    ids = [credentials.register("U", f"u{i}@x.com", "pw").id for i in range(3)]

    assert ids == [FROZEN_MS, FROZEN_MS + 1, FROZEN_MS + 2]


def test_ids_stay_above_stored_ids(store: MemoryKeyValueStore) -> None:
    first = CredentialService(UserRepository(store, "ecom_users"), clock_ms=lambda: 5_000)
    existing = first.register("Old", "old@x.com", "pw")

    # A clock running behind the stored data still yields a larger id.
    fresh = CredentialService(UserRepository(store, "ecom_users"), clock_ms=lambda: 10)
    newer = fresh.register("New", "new@x.com", "pw")

    assert newer.id > existing.id


@pytest.mark.parametrize(
    "email,password",
    [("   ", "pw"), ("a@x.com", "")],
)
def test_register_rejects_invalid_input(credentials: CredentialService, email, password) -> None:
    with pytest.raises(ValidationError):
        credentials.register("A", email, password)

    assert credentials.list_users() == []


def test_authenticate_success_is_case_insensitive(credentials: CredentialService) -> None:
    user = credentials.register("A", "a@x.com", "secret1")

    assert credentials.authenticate(" A@X.COM ", "secret1") == user


def test_authenticate_wrong_password(credentials: CredentialService) -> None:
    credentials.register("A", "a@x.com", "secret1")

    with pytest.raises(AuthError):
        credentials.authenticate("a@x.com", "wrong")

    with pytest.raises(AuthError):
        credentials.authenticate("a@x.com", "")


def test_authenticate_unknown_email(credentials: CredentialService) -> None:
    with pytest.raises(NotFoundError) as exc:
        credentials.authenticate("nobody@x.com", "x")

    assert exc.value.message == "No account with that email"


def test_find_by_email(credentials: CredentialService) -> None:
    user = credentials.register("A", "a@x.com", "secret1")

    assert credentials.find_by_email("A@x.com") == user
    assert credentials.find_by_email("b@x.com") is None


@pytest.mark.parametrize("email", ["a@shop.test", "dev@localhost", "A@X"])
def test_register_accepts_any_non_blank_email(credentials: CredentialService, email: str) -> None:
    user = credentials.register("A", email, "secret1")

    assert user.email == email.lower()
    assert credentials.authenticate(email, "secret1") == user
