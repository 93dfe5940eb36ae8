"""
Cocktail API — Landing Page
=============================

GET / renders a short HTML page describing the API (Jinja2 template).
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from cocktail_api import __version__
from cocktail_api.deps import get_catalog
from cocktail_api.services.catalog_service import CatalogService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Index"])

ENDPOINTS = [
    ("GET", "/drinks?search=<term>", "Search drinks by name", "search limit"),
    ("GET", "/drinks/random", "Featured drink", "api limit"),
    ("POST", "/drinks", "Create a drink (mock)", "write limit, credential, write"),
    ("PATCH", "/drinks/{id}", "Update a drink (mock)", "write limit, credential, write"),
    ("DELETE", "/drinks/{id}", "Delete a drink (mock)", "write limit, credential, delete"),
    ("POST", "/auth/token", "Look up mock credentials", "auth limit"),
    ("GET", "/auth/me", "Who am I", "api limit, credential"),
    ("GET", "/auth/users", "List principals", "auth limit, credential, admin or moderator"),
]


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request, catalog: CatalogService = Depends(get_catalog)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Cocktail API",
            "version": __version__,
            "drink_count": len(catalog),
            "endpoints": ENDPOINTS,
        },
    )
