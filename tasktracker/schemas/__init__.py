"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Task payload rules live in core/validate_task.py, not here

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
