"""Services Layer - the transactional controller.

Invariants:
    - Every business operation is one transaction opened here
"""
