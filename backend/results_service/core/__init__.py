"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Entity mutation and validation rules are synchronous and side-effect free
      (beyond the entity being mutated)

Design Decisions:
    - Functional core separated from imperative shell; the repository Protocol
      is the only async surface declared here
"""
