"""Infrastructure Layer — filesystem, database and logging adapters.

Invariants:
    - Every filesystem path handed out has passed the media-root containment check
    - All SQLAlchemy failures surface as DatabaseError
"""
