"""Services Layer — task and team member lifecycle orchestration.

Invariants:
    - Services depend on core/ protocols, never on SQLAlchemy directly
    - Every error surfaces to the boundary verbatim (no suppression, no retries)

Design Decisions:
    - Two peer services that read each other's stores directly: assignment and
      deactivation need cross-entity checks at call time
"""
