"""Scalability layer: in-process keyed locking. No FastAPI."""

from schoolhub.scalability.keyed_lock import KeyedLock

__all__ = [
    "KeyedLock",
]
