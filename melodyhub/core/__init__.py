"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (PlayQueue mutates only itself)

Design Decisions:
    - Functional core separated from imperative shell: playlist parsing, cover
      ranking, byte ranges and queue transitions are testable without a disk
"""
