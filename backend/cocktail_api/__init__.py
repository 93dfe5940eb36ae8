"""
Cocktail API — Application Package Initializer
================================================

What: Marks the `cocktail_api` directory as a Python package.
Why:  Enables module imports like `from cocktail_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Guards (rate limit, auth, ...)  │  ← FastAPI dependencies per route
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Catalog search, mock mutations
    ├─────────────────────────────────────┤
    │       Schemas (API contracts)       │  ← Pydantic models
    └─────────────────────────────────────┘

    There is no persistence layer: the catalog is seed data and mutations are
    echoed back without being stored.
"""

__version__ = "1.0.0"
