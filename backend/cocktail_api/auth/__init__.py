"""
Cocktail API — Authentication & Authorization
===============================================

- principals.py:     Principal, Role and the static PrincipalRegistry
- authentication.py: Bearer credential → Principal (API key or mock token)
- authorization.py:  Permission / role guards over the attached Principal
"""
