"""Pydantic Schemas: request/response models for API endpoints.

Invariants:
    - Request schemas parse shape and types only; business field rules live in
      core/validate_item.py and run on model_dump()
    - Response schemas are lossless projections of core entities

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
