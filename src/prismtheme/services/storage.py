"""Asynchronous key-value stores that hold the preference record."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Protocol, runtime_checkable

__all__ = ["InMemoryPreferenceStore", "JsonFilePreferenceStore", "PreferenceStore"]

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class PreferenceStore(Protocol):
    """Minimal async get/set contract; both calls may raise."""

    async def get(self, key: str) -> str | None:  # pragma: no cover - Protocol placeholder
        ...

    async def set(self, key: str, value: str) -> None:  # pragma: no cover - Protocol placeholder
        ...


class InMemoryPreferenceStore:
    """Dict-backed store with optional injected failures."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        self.read_error: BaseException | None = None
        self.write_error: BaseException | None = None
        self.get_calls: list[str] = []
        self.set_calls: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        self.get_calls.append(key)
        await asyncio.sleep(0)
        if self.read_error is not None:
            raise self.read_error
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        await asyncio.sleep(0)
        if self.write_error is not None:
            raise self.write_error
        self._values[key] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)


class JsonFilePreferenceStore:
    """Durable store keeping every key in a single JSON object file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        payload = await asyncio.to_thread(self._read_payload)
        value = payload.get(key)
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write_value, key, value)

    def _read_payload(self) -> Dict[str, object]:
        if not self._path.exists():
            return {}
        payload = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Preference file {self._path} must contain a JSON object")
        return payload

    def _write_value(self, key: str, value: str) -> None:
        try:
            payload = self._read_payload()
        except ValueError as exc:
            LOGGER.warning("Replacing unreadable preference file %s: %s", self._path, exc)
            payload = {}
        payload[key] = value
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        descriptor, tmp_name = tempfile.mkstemp(
            dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(body)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        finally:
            if os.path.exists(tmp_name):  # pragma: no cover - cleanup path
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        LOGGER.debug("Stored key %s in %s", key, self._path)
