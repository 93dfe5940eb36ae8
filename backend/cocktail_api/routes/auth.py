"""
Cocktail API — Auth Helper Routes
===================================

What:  Development helpers around the mock credential registry.

    POST /auth/token   username → API key + mock token     (auth limit)
    GET  /auth/me      the caller's own principal          (api limit, authenticate)
    GET  /auth/users   every principal, no credentials     (auth limit, authenticate,
                                                            admin or moderator)

POST /auth/token answers 404 when `enable_dev_auth` is off.
"""

import logging

from fastapi import APIRouter, Depends

from cocktail_api.auth.authentication import require_authentication
from cocktail_api.auth.authorization import require_moderator_or_admin
from cocktail_api.auth.principals import Principal, PrincipalRegistry
from cocktail_api.config import Settings
from cocktail_api.deps import get_principals, get_settings
from cocktail_api.exceptions import NotFoundError
from cocktail_api.middleware.rate_limit import rate_limit
from cocktail_api.schemas.drink import (
    Credentials,
    ErrorResponse,
    PrincipalListResponse,
    PrincipalOut,
    PrincipalResponse,
    TokenRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _principal_out(principal: Principal) -> PrincipalOut:
    return PrincipalOut(**principal.to_dict())


@router.post(
    "/token",
    response_model=TokenResponse,
    dependencies=[Depends(rate_limit("auth"))],
    responses={
        404: {"description": "Unknown user or helper disabled", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="Look up mock credentials for a user",
)
async def issue_credentials(
    body: TokenRequest,
    settings: Settings = Depends(get_settings),
    registry: PrincipalRegistry = Depends(get_principals),
) -> TokenResponse:
    if not settings.enable_dev_auth:
        raise NotFoundError(message="Not found")

    api_key = registry.api_key_for(body.username)
    token = registry.token_for(body.username)
    if api_key is None or token is None:
        logger.warning("Credential lookup for unknown user %r", body.username)
        raise NotFoundError(resource="User", resource_id=body.username)

    return TokenResponse(data=Credentials(username=body.username, api_key=api_key, token=token))


@router.get(
    "/me",
    response_model=PrincipalResponse,
    dependencies=[Depends(rate_limit("api"))],
    responses={401: {"description": "Missing or invalid credential", "model": ErrorResponse}},
    summary="The authenticated caller",
)
async def who_am_i(principal: Principal = Depends(require_authentication())) -> PrincipalResponse:
    return PrincipalResponse(data=_principal_out(principal))


@router.get(
    "/users",
    response_model=PrincipalListResponse,
    dependencies=[
        Depends(rate_limit("auth")),
        Depends(require_authentication()),
        Depends(require_moderator_or_admin),
    ],
    responses={
        401: {"description": "Missing or invalid credential", "model": ErrorResponse},
        403: {"description": "Requires admin or moderator", "model": ErrorResponse},
    },
    summary="List known principals",
)
async def list_principals(registry: PrincipalRegistry = Depends(get_principals)) -> PrincipalListResponse:
    principals = [_principal_out(p) for p in registry.principals()]
    return PrincipalListResponse(data=principals, total=len(principals))
