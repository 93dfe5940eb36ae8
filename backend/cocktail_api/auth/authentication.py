"""
Cocktail API — Authentication
===============================

What:  Turns an `Authorization: Bearer <credential>` header into a Principal.
How:   `authenticate()` is a pure function over the header value and a
       PrincipalRegistry. `require_authentication()` wraps it as a route guard
       that attaches the result to `request.state.principal`.

Schemes:
    api_key  The credential is looked up verbatim as an API key.
    token    The credential must be `mock-jwt-<principal id>`. The id is looked
             up directly. There is NO signature or expiry check: the token
             scheme is an allowlist standing in for a real credential system.
"""

import logging
from enum import Enum
from typing import Optional

from fastapi import Request

from cocktail_api.auth.principals import TOKEN_PREFIX, Principal, PrincipalRegistry
from cocktail_api.exceptions import AuthFailure, UnauthenticatedError

logger = logging.getLogger(__name__)


class AuthScheme(str, Enum):
    API_KEY = "api_key"
    TOKEN = "token"


def _parse_bearer(authorization: Optional[str], scheme: AuthScheme) -> str:
    api_key = scheme is AuthScheme.API_KEY
    if not authorization:
        raise UnauthenticatedError(
            AuthFailure.MISSING_HEADER,
            "Authorization header is required",
            hint='Include "Authorization: Bearer your-api-key" in your request headers' if api_key else None,
        )

    parts = authorization.split(" ")
    if parts[0] != "Bearer" or len(parts) < 2 or not parts[1]:
        raise UnauthenticatedError(
            AuthFailure.MALFORMED_HEADER,
            "Invalid authorization format",
            hint='Use "Authorization: Bearer your-api-key" format' if api_key else None,
        )
    return parts[1]


def authenticate(
    authorization: Optional[str],
    registry: PrincipalRegistry,
    scheme: AuthScheme = AuthScheme.API_KEY,
) -> Principal:
    """
    Resolve the principal behind an Authorization header value.

    Raises:
        UnauthenticatedError: reason MissingHeader, MalformedHeader,
            InvalidCredential or MalformedToken.
    """
    credential = _parse_bearer(authorization, scheme)

    if scheme is AuthScheme.API_KEY:
        principal = registry.find_by_api_key(credential)
        if principal is None:
            raise UnauthenticatedError(
                AuthFailure.INVALID_CREDENTIAL,
                "Invalid API key",
                hint="Please check your API key and try again",
            )
        return principal

    if not credential.startswith(TOKEN_PREFIX):
        raise UnauthenticatedError(AuthFailure.MALFORMED_TOKEN, "Invalid token format")

    principal = registry.find_by_id(credential[len(TOKEN_PREFIX):])
    if principal is None:
        raise UnauthenticatedError(AuthFailure.INVALID_CREDENTIAL, "Invalid token")
    return principal


def require_authentication(scheme: Optional[AuthScheme] = None):
    """
    Build a route guard that authenticates the caller.

    Args:
        scheme: Fixed scheme for this route. When None, the app's configured
                `auth_scheme` setting decides.
    """

    async def guard(request: Request) -> Principal:
        chosen = scheme or AuthScheme(request.app.state.settings.auth_scheme)
        try:
            principal = authenticate(
                request.headers.get("Authorization"),
                request.app.state.principals,
                chosen,
            )
        except UnauthenticatedError as e:
            logger.warning("Authentication failed (%s): %s", e.reason.value, e.message)
            raise

        request.state.principal = principal
        return principal

    return guard


def current_principal(request: Request) -> Optional[Principal]:
    """The principal attached by an earlier authentication guard, if any."""
    return getattr(request.state, "principal", None)
