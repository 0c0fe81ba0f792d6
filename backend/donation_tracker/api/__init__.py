"""API Layer — FastAPI routes, response envelope and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with the {success, data?, message?, errors?} envelope

Design Decisions:
    - Thin routes: Validator -> Store -> envelope, no business logic here
"""
