"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Request schemas check TYPES only; field rules (lengths, enum ranges, email
      syntax) are enforced by core/ validators so every client gets the same
      field -> [messages] error map
    - Response schemas are built from core records, never from ORM rows

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
