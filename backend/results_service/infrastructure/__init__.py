"""Infrastructure Layer: database sessions, storage adapter, logging setup.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Only layer (with models/ and db/) that imports SQLAlchemy
"""
