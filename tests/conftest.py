"""Shared pytest fixtures."""

from __future__ import annotations

import asyncio

import pytest

from prismtheme.services.preferences import PreferenceRecord
from prismtheme.services.storage import InMemoryPreferenceStore


class GatedPreferenceStore(InMemoryPreferenceStore):
    """In-memory store whose reads wait until the test opens the gate."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.gate = asyncio.Event()

    async def get(self, key: str) -> str | None:
        await self.gate.wait()
        return await super().get(key)


@pytest.fixture
def memory_store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture
def stored_record():
    def _factory(is_dark: bool) -> str:
        return PreferenceRecord(is_dark=is_dark).encode()

    return _factory


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PRISMTHEME_STORAGE_PATH",
        "PRISMTHEME_STORAGE_KEY",
        "PRISMTHEME_COLOR_SCHEME",
        "PRISMTHEME_DEBUG_LOGGING",
        "PRISMTHEME_SETTINGS_PATH",
        "PRISMTHEME_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gated_store() -> GatedPreferenceStore:
    return GatedPreferenceStore()
