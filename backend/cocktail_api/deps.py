"""
Cocktail API — Dependency Accessors
=====================================

FastAPI dependencies that hand route handlers the components the app factory
stored on app.state. Routes never import module-level singletons, so each app
instance (one per test, for example) is fully isolated.
"""

from typing import Dict

from fastapi import Request

from cocktail_api.auth.principals import PrincipalRegistry
from cocktail_api.config import Settings
from cocktail_api.middleware.rate_limit import RateLimiter
from cocktail_api.services.catalog_service import CatalogService
from cocktail_api.services.drink_service import DrinkService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> CatalogService:
    return request.app.state.catalog


def get_drink_service(request: Request) -> DrinkService:
    return request.app.state.drink_service


def get_principals(request: Request) -> PrincipalRegistry:
    return request.app.state.principals


def get_rate_limiters(request: Request) -> Dict[str, RateLimiter]:
    return request.app.state.rate_limiters
