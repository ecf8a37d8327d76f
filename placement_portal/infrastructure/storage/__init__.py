"""Persistent key-value storage backends."""

from placement_portal.infrastructure.storage.key_value import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
)

__all__ = ["JsonFileStorage", "KeyValueStorage", "MemoryStorage"]
