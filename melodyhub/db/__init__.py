"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite by default: a personal media server needs no database daemon;
      asyncpg is used when DATABASE_URL points at PostgreSQL
"""
