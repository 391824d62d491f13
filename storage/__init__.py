"""Local persistence for viva history and other string records."""
from .kv import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from .migrate import migrate, schema_version

__all__ = ["KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore", "migrate", "schema_version"]
