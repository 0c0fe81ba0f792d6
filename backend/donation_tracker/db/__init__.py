"""Database Infrastructure — SQLAlchemy declarative Base shared by all ORM models.

Invariants:
    - Single Base metadata for the whole application

Design Decisions:
    - aiosqlite by default, asyncpg for PostgreSQL: both are native async drivers
"""
