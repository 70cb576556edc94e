"""Taskboard — task and team member tracking API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
