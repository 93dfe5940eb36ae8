"""
Cocktail API — Health Check Route
===================================

What:  Liveness endpoint for container health checks and load balancers.
How:   No external dependencies exist, so the service is healthy whenever it
       answers. The body reports catalog size and how many rate-limit windows
       each limiter is tracking, which shows whether the sweep keeps up.

Not rate-limited and not access-logged.
"""

import time
from typing import Dict

from fastapi import APIRouter, Depends

from cocktail_api import __version__
from cocktail_api.deps import get_catalog, get_rate_limiters
from cocktail_api.middleware.rate_limit import RateLimiter
from cocktail_api.schemas.drink import HealthResponse
from cocktail_api.services.catalog_service import CatalogService

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(
    catalog: CatalogService = Depends(get_catalog),
    limiters: Dict[str, RateLimiter] = Depends(get_rate_limiters),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        drinks=len(catalog),
        rate_limit_keys={name: len(limiter) for name, limiter in limiters.items()},
        uptime_seconds=round(time.time() - _start_time, 2),
    )
