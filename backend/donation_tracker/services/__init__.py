"""Services Layer — IO orchestration around the pure core.

Invariants:
    - Services own sessions and transactions; core/ functions never await
"""
