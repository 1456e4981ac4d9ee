"""Service layer: preference persistence and runtime settings."""

from .preferences import (
    PREFERENCE_STORAGE_KEY,
    PreferenceRecord,
    PreferenceStorageError,
    StorageParseFailure,
    StorageReadFailure,
    StorageWriteFailure,
)
from .settings import Settings, SettingsStore
from .storage import InMemoryPreferenceStore, JsonFilePreferenceStore, PreferenceStore

__all__ = [
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "PREFERENCE_STORAGE_KEY",
    "PreferenceRecord",
    "PreferenceStorageError",
    "PreferenceStore",
    "Settings",
    "SettingsStore",
    "StorageParseFailure",
    "StorageReadFailure",
    "StorageWriteFailure",
]
