"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all
      and Alembic autogenerate
"""

from melodyhub.models.play_queue import PlayQueueRecord  # noqa: F401
