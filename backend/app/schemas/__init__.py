"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (user input, API responses)
    - Built from DTOs only; never from ORM rows

Design Decisions:
    - Separate from core/dto.py: schemas are API contracts, DTOs are the core's currency
"""
