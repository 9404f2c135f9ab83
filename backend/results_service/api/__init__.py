"""API Layer: FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes never contain business logic (delegate to services)
    - Routes translate service absences (None / False) into 404
"""
