"""
Cocktail API — Routes Package
===============================

Route Inventory:
    - index.py:   GET /                    (landing page)
    - drinks.py:  GET /drinks?search=      (catalog search)
                  GET /drinks/random       (featured drink)
                  POST /drinks             (mock create)
                  PATCH /drinks/{id}       (mock update)
                  DELETE /drinks/{id}      (mock delete)
    - auth.py:    POST /auth/token, GET /auth/me, GET /auth/users
    - health.py:  GET /health

Routes stay thin: guards run as dependencies, logic lives in services.
"""
