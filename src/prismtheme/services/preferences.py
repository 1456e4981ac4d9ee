"""The persisted dark-mode preference and its JSON wire format."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

__all__ = [
    "PREFERENCE_STORAGE_KEY",
    "PreferenceRecord",
    "PreferenceStorageError",
    "StorageParseFailure",
    "StorageReadFailure",
    "StorageWriteFailure",
    "utcnow",
]

PREFERENCE_STORAGE_KEY = "@prismtheme/theme_preference"


class PreferenceStorageError(RuntimeError):
    """Base class for recoverable preference storage problems."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class StorageReadFailure(PreferenceStorageError):
    """The backing store could not be read."""


class StorageParseFailure(PreferenceStorageError):
    """The stored value is not JSON or lacks a boolean ``isDark``."""


class StorageWriteFailure(PreferenceStorageError):
    """The backing store rejected a write."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class PreferenceRecord:
    """The user's last dark-mode choice and when it was made."""

    is_dark: bool
    last_updated: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {"isDark": self.is_dark, "lastUpdated": self.last_updated.isoformat()}

    def encode(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def decode(cls, raw: str, *, key: str | None = None) -> "PreferenceRecord":
        """Parse a stored value; extra fields are ignored."""

        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise StorageParseFailure(f"Stored preference is not valid JSON: {exc}", key=key) from exc
        if not isinstance(payload, dict):
            raise StorageParseFailure("Stored preference must be a JSON object", key=key)
        is_dark = payload.get("isDark")
        if not isinstance(is_dark, bool):
            raise StorageParseFailure("Stored preference lacks a boolean 'isDark'", key=key)
        return cls(is_dark=is_dark, last_updated=_parse_timestamp(payload.get("lastUpdated")))


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.fromtimestamp(0, timezone.utc)
