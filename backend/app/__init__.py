"""Chat Backend Package - users, messages and the transactional data-access layer.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
