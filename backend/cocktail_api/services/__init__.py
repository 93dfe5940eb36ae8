"""
Cocktail API — Services Layer
===============================

Business logic, independent of HTTP.

Service Inventory:
    - CatalogService: Search and featured drink over the seed catalog
    - DrinkService:   Mock create/update/delete that echo trimmed input

Both are built once by the app factory and kept on app.state; routes reach
them through cocktail_api.deps.
"""
