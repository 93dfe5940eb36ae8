# Schemas package init
"""
Cocktail API — Request/Response Schemas
=========================================

    - drink.py: drink records (CocktailDB layout), write payloads, auth helper
                bodies, error and health responses
"""
