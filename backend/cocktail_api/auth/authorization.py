"""
Cocktail API — Authorization Guards
=====================================

What:  Permission and role checks over the already-authenticated Principal.
How:   check_permission / check_role are pure predicates that raise.
       require_permission / require_role wrap them as route guards that read
       `request.state.principal`; they must come after an authentication guard
       in the route's dependency list.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

from fastapi import Request

from cocktail_api.auth.authentication import current_principal
from cocktail_api.auth.principals import Principal
from cocktail_api.exceptions import AuthFailure, ForbiddenError, UnauthenticatedError

logger = logging.getLogger(__name__)

RoleSpec = Union[str, Sequence[str]]


def _authenticated(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise UnauthenticatedError(AuthFailure.UNAUTHENTICATED, "Authentication required")
    return principal


def _normalize_roles(roles: RoleSpec) -> Tuple[str, ...]:
    if isinstance(roles, str):
        return (roles,)
    return tuple(roles)


def check_permission(principal: Optional[Principal], permission: str) -> Principal:
    principal = _authenticated(principal)
    if not principal.has_permission(permission):
        logger.warning("Principal %s lacks permission %r", principal.username, permission)
        raise ForbiddenError(
            f"Insufficient permissions. Required: {permission}",
            context={"userPermissions": sorted(principal.permissions)},
        )
    return principal


def check_role(principal: Optional[Principal], roles: RoleSpec) -> Principal:
    allowed = _normalize_roles(roles)
    principal = _authenticated(principal)
    if not principal.has_role(*allowed):
        logger.warning("Principal %s has role %r, needs one of %s", principal.username, principal.role.value, allowed)
        raise ForbiddenError(
            f"Insufficient role. Required: {' or '.join(allowed)}",
            context={"userRole": principal.role.value},
        )
    return principal


def require_permission(permission: str):
    """Route guard: the attached principal must hold `permission`."""

    async def guard(request: Request) -> Principal:
        return check_permission(current_principal(request), permission)

    return guard


def require_role(roles: RoleSpec):
    """Route guard: the attached principal's role must be one of `roles`."""
    allowed = _normalize_roles(roles)

    async def guard(request: Request) -> Principal:
        return check_role(current_principal(request), allowed)

    return guard


require_write_permission = require_permission("write")
require_delete_permission = require_permission("delete")
require_moderator_or_admin = require_role(["admin", "moderator"])
require_admin = require_role("admin")
