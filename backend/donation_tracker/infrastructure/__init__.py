"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ domain logic beyond the error hierarchy
    - All driver exceptions mapped to core/errors.py types before leaving this layer
"""
