"""
Cocktail API — Authentication Unit Tests
==========================================

What:  Tests for authenticate() and the principal registry.
How:   Calls the pure function directly with header values; no HTTP involved.

What we test:
    ✅ Missing / malformed Authorization headers
    ✅ Unknown API key
    ✅ Each known API key resolves to exactly its principal
    ✅ Token scheme: valid token, malformed token, unknown id
    ✅ Registry lookups and duplicate detection
"""

import pytest

from cocktail_api.auth.authentication import AuthScheme, authenticate
from cocktail_api.auth.principals import (
    DEFAULT_PRINCIPALS,
    PrincipalRegistry,
    Role,
)
from cocktail_api.exceptions import AuthFailure, UnauthenticatedError


class TestApiKeyScheme:
    """Tests for `Authorization: Bearer <api key>`."""

    def test_missing_header(self, registry):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate(None, registry)

        error = exc_info.value
        assert error.reason is AuthFailure.MISSING_HEADER
        assert error.message == "Authorization header is required"
        assert error.to_dict()["hint"] == 'Include "Authorization: Bearer your-api-key" in your request headers'

    def test_empty_header(self, registry):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate("", registry)
        assert exc_info.value.reason is AuthFailure.MISSING_HEADER

    @pytest.mark.parametrize("header", ["admin-api-key-123456", "Basic abc", "Bearer", "Bearer ", "bearer key"])
    def test_malformed_header(self, registry, header):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate(header, registry)

        assert exc_info.value.reason is AuthFailure.MALFORMED_HEADER
        assert exc_info.value.message == "Invalid authorization format"

    def test_unknown_key(self, registry):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate("Bearer not-a-real-key", registry)

        body = exc_info.value.to_dict()
        assert body["error"] == "Unauthorized"
        assert body["message"] == "Invalid API key"
        assert body["reason"] == "InvalidCredential"
        assert body["hint"] == "Please check your API key and try again"

    @pytest.mark.parametrize("record", DEFAULT_PRINCIPALS, ids=lambda r: r.principal.username)
    def test_each_key_resolves_its_principal(self, registry, record):
        principal = authenticate(f"Bearer {record.api_key}", registry)
        assert principal == record.principal

    def test_key_match_is_exact(self, registry):
        with pytest.raises(UnauthenticatedError):
            authenticate("Bearer ADMIN-API-KEY-123456", registry)


class TestTokenScheme:
    """Tests for `Authorization: Bearer mock-jwt-<id>`."""

    def test_valid_token(self, registry):
        principal = authenticate("Bearer mock-jwt-user_2", registry, AuthScheme.TOKEN)
        assert principal.username == "bartender"
        assert principal.role is Role.MODERATOR

    def test_token_without_prefix(self, registry):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate("Bearer admin-api-key-123456", registry, AuthScheme.TOKEN)

        assert exc_info.value.reason is AuthFailure.MALFORMED_TOKEN
        assert exc_info.value.message == "Invalid token format"

    def test_token_for_unknown_id(self, registry):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate("Bearer mock-jwt-user_99", registry, AuthScheme.TOKEN)

        assert exc_info.value.reason is AuthFailure.INVALID_CREDENTIAL
        assert exc_info.value.message == "Invalid token"

    def test_missing_header_has_no_hint(self, registry):
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticate(None, registry, AuthScheme.TOKEN)
        assert "hint" not in exc_info.value.to_dict()


class TestPrincipalRegistry:
    """Tests for registry lookups."""

    def test_lookups(self, registry):
        assert len(registry) == 3
        assert registry.find_by_id("user_1").username == "admin"
        assert registry.find_by_username("customer").id == "user_3"
        assert registry.find_by_api_key("bartender-api-key-789012").id == "user_2"
        assert registry.find_by_id("nobody") is None

    def test_credentials_for_username(self, registry):
        assert registry.api_key_for("admin") == "admin-api-key-123456"
        assert registry.token_for("admin") == "mock-jwt-user_1"
        assert registry.api_key_for("ghost") is None
        assert registry.token_for("ghost") is None

    def test_duplicate_api_key_rejected(self):
        records = [DEFAULT_PRINCIPALS[0], DEFAULT_PRINCIPALS[0]]
        with pytest.raises(ValueError):
            PrincipalRegistry(records)

    def test_principal_to_dict_sorts_permissions(self, registry):
        data = registry.find_by_id("user_1").to_dict()
        assert data == {
            "id": "user_1",
            "username": "admin",
            "role": "admin",
            "permissions": ["delete", "manage", "read", "write"],
        }
