"""Service Layer: use-case orchestration between routes and storage.

Invariants:
    - Services hold a repository reference and nothing else (no caches, no locks)
    - Services return response schemas, never ORM rows
"""
