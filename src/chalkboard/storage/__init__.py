"""Key-value storage module for chalkboard.

Provides the persistence collaborator the chat state is saved through.
"""

from .base import KeyValueStore
from .factory import create_key_value_store
from .in_memory import InMemoryKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "create_key_value_store",
]
