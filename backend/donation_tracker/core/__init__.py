"""Core Layer — pure domain logic: types, field rules, validation, outcomes.

Invariants:
    - No IO: nothing in core/ touches the database or the network
    - Core NEVER imports from services/, api/ or infrastructure/
    - Schemas (pydantic) are the only non-core import, used by the Validator

Design Decisions:
    - Field rules live in one module so the Validator and the Store reject
      the same input with the same message
"""
