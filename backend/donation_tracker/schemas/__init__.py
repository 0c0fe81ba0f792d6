"""Pydantic Schemas — request/response validation for the donation API.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types and field rules from core/ drive every check

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
