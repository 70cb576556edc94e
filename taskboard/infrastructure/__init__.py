"""Infrastructure Layer — database access, store implementations, cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols; core never imports from here
    - All SQLAlchemy errors mapped to DatabaseError at the session boundary
"""
