"""
Cocktail API — Middleware & Route Guards
==========================================

What:  Cross-cutting concerns applied around route handlers.

App-wide Starlette middleware (every request):
    Request → [Request ID] → [Access Logging] → Route

Per-route guards (FastAPI dependencies, declared in order on each route):
    [Rate Limit] → [Authenticate] → [Authorize] → [Validate] → Handler

    Each guard either returns or raises one of the exceptions in
    cocktail_api.exceptions, so the chain stops at the first failing guard and
    a global exception handler renders the error body.

Modules:
    - request_id.py: correlation ID per request
    - logging.py:    access log line per request
    - rate_limit.py: fixed window limiters + guard factory
    - validation.py: drink payload validation guard
    (authentication/authorization guards live in cocktail_api.auth)
"""
