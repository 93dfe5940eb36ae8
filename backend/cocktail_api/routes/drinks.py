"""
Cocktail API — Drink Route Handlers
=====================================

What:  GET /drinks, GET /drinks/random, POST /drinks, PATCH /drinks/{id},
       DELETE /drinks/{id}.
How:   Each route lists its guards in `dependencies=[...]`, in the order they
       must run. A guard that fails raises, so later guards and the handler
       never run.

Guard chains:
    GET    /drinks          search limit
    GET    /drinks/random   api limit
    POST   /drinks          write limit → authenticate → write → validate body
    PATCH  /drinks/{id}     write limit → authenticate → write → validate body
    DELETE /drinks/{id}     write limit → authenticate → delete

Handlers wrap unexpected failures in InternalError, so the client always gets
a structured 500 carrying the underlying message.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from cocktail_api.auth.authentication import require_authentication
from cocktail_api.auth.authorization import require_delete_permission, require_write_permission
from cocktail_api.deps import get_catalog, get_drink_service
from cocktail_api.exceptions import BadRequestError, CocktailAPIError, InternalError
from cocktail_api.middleware.rate_limit import rate_limit
from cocktail_api.middleware.validation import validated_drink_payload
from cocktail_api.schemas.drink import (
    DeleteDrinkResponse,
    DrinkMutationResponse,
    DrinkPayload,
    DrinkSearchResponse,
    ErrorResponse,
    RandomDrinkResponse,
)
from cocktail_api.services.catalog_service import CatalogService
from cocktail_api.services.drink_service import DrinkService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/drinks", tags=["Drinks"])

_GUARD_ERRORS = {
    401: {"description": "Missing or invalid credential", "model": ErrorResponse},
    403: {"description": "Missing permission", "model": ErrorResponse},
    429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}

_WRITE_GUARDS = [
    Depends(rate_limit("write")),
    Depends(require_authentication()),
    Depends(require_write_permission),
]

_DELETE_GUARDS = [
    Depends(rate_limit("write")),
    Depends(require_authentication()),
    Depends(require_delete_permission),
]


@router.get(
    "",
    response_model=DrinkSearchResponse,
    dependencies=[Depends(rate_limit("search"))],
    responses={
        400: {"description": "Missing search term", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Search drinks by name",
)
async def search_drinks(
    search: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring of the drink name",
    ),
    catalog: CatalogService = Depends(get_catalog),
) -> DrinkSearchResponse:
    """
    Search the catalog. Zero matches is still a 200 with `data: []`.
    """
    if not search:
        raise BadRequestError(
            message="Search parameter is required",
            context={"example": "/drinks?search=margarita"},
        )

    logger.info("Search term: %r", search)
    try:
        drinks = catalog.search(search)
    except CocktailAPIError:
        raise
    except Exception as e:
        logger.error("Error in search_drinks: %s", e, exc_info=True)
        raise InternalError(message=str(e) or "Unknown error occurred") from e

    return DrinkSearchResponse(
        message=f'Found {len(drinks)} drinks for search term: "{search}"',
        data=drinks,
        total=len(drinks),
    )


@router.get(
    "/random",
    response_model=RandomDrinkResponse,
    dependencies=[Depends(rate_limit("api"))],
    responses={429: _GUARD_ERRORS[429], 500: _GUARD_ERRORS[500]},
    summary="Featured drink",
)
async def random_drink(catalog: CatalogService = Depends(get_catalog)) -> RandomDrinkResponse:
    try:
        drink = catalog.random_drink()
    except Exception as e:
        logger.error("Error in random_drink: %s", e, exc_info=True)
        raise InternalError(message=str(e) or "Unknown error occurred") from e

    if drink is None:
        return RandomDrinkResponse(message="The catalog is empty", data=None)
    return RandomDrinkResponse(message=f"Featured drink: {drink.name}", data=drink)


@router.post(
    "",
    status_code=201,
    response_model=DrinkMutationResponse,
    response_model_exclude_none=True,
    dependencies=_WRITE_GUARDS,
    responses={400: {"description": "Invalid payload", "model": ErrorResponse}, **_GUARD_ERRORS},
    summary="Create a drink (mock, not persisted)",
)
async def create_drink(
    payload: DrinkPayload = Depends(validated_drink_payload),
    drinks: DrinkService = Depends(get_drink_service),
) -> DrinkMutationResponse:
    try:
        result = await drinks.create_drink(payload)
    except Exception as e:
        logger.error("Error in create_drink: %s", e, exc_info=True)
        raise InternalError(message="Failed to create drink", details=str(e) or type(e).__name__) from e

    return DrinkMutationResponse(message="Drink created successfully", data=result)


@router.patch(
    "/{drink_id}",
    response_model=DrinkMutationResponse,
    response_model_exclude_none=True,
    dependencies=_WRITE_GUARDS,
    responses={400: {"description": "Invalid payload", "model": ErrorResponse}, **_GUARD_ERRORS},
    summary="Update a drink (mock, not persisted)",
)
async def update_drink(
    drink_id: str,
    payload: DrinkPayload = Depends(validated_drink_payload),
    drinks: DrinkService = Depends(get_drink_service),
) -> DrinkMutationResponse:
    """
    Echo the payload back under the path id. The id is not checked against
    anything; there is no store to check it against.
    """
    try:
        result = await drinks.update_drink(drink_id, payload)
    except Exception as e:
        logger.error("Error in update_drink: %s", e, exc_info=True)
        raise InternalError(message="Failed to update drink", details=str(e) or type(e).__name__) from e

    return DrinkMutationResponse(message="Drink updated successfully", data=result)


@router.delete(
    "/{drink_id}",
    response_model=DeleteDrinkResponse,
    dependencies=_DELETE_GUARDS,
    responses=_GUARD_ERRORS,
    summary="Delete a drink (mock, not persisted)",
)
async def delete_drink(
    drink_id: str,
    drinks: DrinkService = Depends(get_drink_service),
) -> DeleteDrinkResponse:
    try:
        message = await drinks.delete_drink(drink_id)
    except Exception as e:
        logger.error("Error in delete_drink: %s", e, exc_info=True)
        raise InternalError(message="Failed to delete drink", details=str(e) or type(e).__name__) from e

    return DeleteDrinkResponse(message=message)
