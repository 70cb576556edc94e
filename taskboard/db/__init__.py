"""Database Package — declarative Base shared by every ORM model.

Invariants:
    - Base (db/base.py) is the single metadata registry for every table
    - The request-scoped session lives in infrastructure/database.py, not here
"""
