"""Service Layer — orchestrates core logic with filesystem and database IO.

Invariants:
    - Services raise MelodyHubError subclasses, never HTTPException
    - Queue mutations happen on core.play_queue.PlayQueue, then get persisted
"""
