"""Infrastructure Layer - database lifecycle, the DAO, and logging setup.

Invariants:
    - Only this layer talks to the store
    - Every store failure is surfaced as DatabaseError (core/errors.py)
"""
