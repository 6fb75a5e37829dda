"""Database Declarations — SQLAlchemy Base shared by the ORM models.

Invariants:
    - All sessions are async (AsyncSession)
    - asyncpg driver for PostgreSQL, aiosqlite in tests
"""
