"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes commit the request transaction after the service call succeeds

Design Decisions:
    - Thin routes delegate to lifecycle services
"""
