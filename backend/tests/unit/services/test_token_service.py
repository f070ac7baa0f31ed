from datetime import timedelta

import pytest
from freezegun import freeze_time
from studyhub.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from studyhub.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    PrincipalNotFoundError,
    RefreshMismatchError,
    TokenExpiredError,
    TokenInvalidError,
)
from studyhub.services.auth.dto import AuthTokenConfig, Principal
from studyhub.services.auth.tokens import TokenService
from tests.helpers.credential_store import InMemoryCredentialStore


@pytest.fixture()
def store() -> InMemoryCredentialStore:
    store = InMemoryCredentialStore()
    store.add(
        Principal(
            id=1,
            username="alice",
            email="alice@example.com",
            full_name="Alice Doe",
            role="user",
        )
    )
    return store


@pytest.fixture()
def provider() -> PyJWTTokenProvider:
    return PyJWTTokenProvider(
        access_secret="unit-access-secret-0123456789abcdef",
        refresh_secret="unit-refresh-secret-0123456789abcdef",
    )


@pytest.fixture()
def tokens(provider, store) -> TokenService:
    return TokenService(
        token_provider=provider,
        credential_store=store,
        token_cfg=AuthTokenConfig(
            access_expires=timedelta(minutes=15), refresh_expires=timedelta(days=10)
        ),
    )


@pytest.fixture()
def alice(store) -> Principal:
    return store.get_principal(1)


class TestIssuance:
    def test_access_token_carries_identity_claims(self, tokens, alice, provider):
        token = tokens.issue_access_token(alice)

        claims = provider.decode_access(token)

        assert claims["id"] == 1
        assert claims["username"] == "alice"
        assert claims["email"] == "alice@example.com"
        assert claims["fullName"] == "Alice Doe"
        assert "exp" in claims

    def test_refresh_token_is_stored_in_slot(self, tokens, alice, store, provider):
        token = tokens.issue_refresh_token(alice)

        assert store.slot_of(alice.id) == token
        assert provider.decode_refresh(token)["id"] == 1

    def test_refresh_for_deleted_user_fails(self, tokens, alice, store):
        store.remove(alice.id)
        with pytest.raises(PrincipalNotFoundError):
            tokens.issue_refresh_token(alice)

    def test_issue_pair_then_verify_recovers_principal(self, tokens, alice):
        pair = tokens.issue_pair(alice)

        assert tokens.verify_access(pair.access_token).id == alice.id
        assert tokens.authenticate(pair.access_token) == alice


class TestVerification:
    def test_expired_access_token(self, tokens, alice):
        with freeze_time("2026-03-01 09:00:00"):
            token = tokens.issue_access_token(alice)
        with freeze_time("2026-03-01 09:15:01"), pytest.raises(TokenExpiredError) as exc:
            tokens.verify_access(token)
        assert exc.value.message == "Token has expired, please log in again"

    def test_access_token_signed_with_other_secret(self, tokens, alice):
        forged = PyJWTTokenProvider(
            access_secret="another-access-secret-0123456789abcdef",
            refresh_secret="another-refresh-secret-0123456789abcdef",
        ).encode_access({"id": 1, "username": "a", "email": "e"}, expires_delta=timedelta(minutes=5))

        with pytest.raises(TokenInvalidError):
            tokens.verify_access(forged)

    def test_refresh_token_is_not_an_access_token(self, tokens, alice):
        refresh = tokens.issue_refresh_token(alice)
        with pytest.raises(TokenInvalidError):
            tokens.verify_access(refresh)

    def test_missing_claims_are_invalid(self, tokens, provider):
        token = provider.encode_access({"id": 1}, expires_delta=timedelta(minutes=5))
        with pytest.raises(TokenInvalidError):
            tokens.verify_access(token)

    def test_authenticate_deleted_user(self, tokens, alice, store):
        token = tokens.issue_access_token(alice)
        store.remove(alice.id)

        with pytest.raises(PrincipalNotFoundError):
            tokens.authenticate(token)

    def test_authenticate_blocked_user(self, tokens, alice, store):
        token = tokens.issue_access_token(alice)
        store.block(alice.id)

        with pytest.raises(AuthorizationError, match="blocked"):
            tokens.authenticate(token)


class TestRotation:
    def test_rotate_replaces_slot(self, tokens, alice, store):
        pair = tokens.issue_pair(alice)

        rotated = tokens.rotate(pair.refresh_token)

        assert rotated.refresh_token != pair.refresh_token
        assert store.slot_of(alice.id) == rotated.refresh_token
        assert tokens.verify_access(rotated.access_token).id == alice.id

    def test_rotated_token_cannot_be_reused(self, tokens, alice):
        pair = tokens.issue_pair(alice)
        tokens.rotate(pair.refresh_token)

        with pytest.raises(RefreshMismatchError):
            tokens.rotate(pair.refresh_token)

    def test_older_token_fails_after_new_login(self, tokens, alice):
        first = tokens.issue_pair(alice)
        tokens.issue_pair(alice)

        with pytest.raises(RefreshMismatchError):
            tokens.rotate(first.refresh_token)

    def test_rotate_after_revoke_fails(self, tokens, alice, store):
        pair = tokens.issue_pair(alice)
        tokens.revoke(alice.id)

        assert store.slot_of(alice.id) is None
        with pytest.raises(RefreshMismatchError):
            tokens.rotate(pair.refresh_token)

    def test_rotate_expired_refresh_token(self, tokens, alice):
        with freeze_time("2026-03-01 09:00:00"):
            pair = tokens.issue_pair(alice)
        with freeze_time("2026-03-11 09:00:01"), pytest.raises(TokenExpiredError):
            tokens.rotate(pair.refresh_token)

    def test_rotate_with_access_token_is_invalid(self, tokens, alice):
        pair = tokens.issue_pair(alice)
        with pytest.raises(TokenInvalidError):
            tokens.rotate(pair.access_token)

    def test_rotate_without_token(self, tokens):
        with pytest.raises(AuthenticationError, match="Unauthorized request"):
            tokens.rotate(None)

    def test_rotate_for_deleted_user(self, tokens, alice, store):
        pair = tokens.issue_pair(alice)
        store.remove(alice.id)

        with pytest.raises(PrincipalNotFoundError):
            tokens.rotate(pair.refresh_token)
