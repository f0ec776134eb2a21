"""
In-memory dataset store.

Responsibilities:
- Hold accepted Places in insertion order, append-only.
- Fix the embedding dimensionality on the first insert and enforce it after.
- Serve scans and (state, city) lookups from consistent snapshots.
"""

from .data_store import DatasetStore

__all__ = ["DatasetStore"]
