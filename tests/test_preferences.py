"""Tests for the preference record codec and the storage backends."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from prismtheme.services.preferences import PreferenceRecord, StorageParseFailure
from prismtheme.services.storage import InMemoryPreferenceStore, JsonFilePreferenceStore, PreferenceStore


def test_record_encodes_two_fields() -> None:
    stamp = datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)
    payload = json.loads(PreferenceRecord(is_dark=True, last_updated=stamp).encode())

    assert payload == {"isDark": True, "lastUpdated": "2026-10-18T12:30:00+00:00"}


def test_record_decode_ignores_extra_fields() -> None:
    raw = json.dumps({"isDark": False, "lastUpdated": "2026-01-02T03:04:05.000Z", "schema": 9})

    record = PreferenceRecord.decode(raw)

    assert record.is_dark is False
    assert record.last_updated == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_record_decode_tolerates_missing_timestamp() -> None:
    record = PreferenceRecord.decode('{"isDark": true}')
    assert record.is_dark is True


@pytest.mark.parametrize(
    "raw",
    ["invalid-json", "[]", '{"lastUpdated": "2026-01-01T00:00:00Z"}', '{"isDark": "yes"}', "null"],
)
def test_record_decode_rejects_bad_payloads(raw: str) -> None:
    with pytest.raises(StorageParseFailure) as excinfo:
        PreferenceRecord.decode(raw, key="prefs")
    assert excinfo.value.key == "prefs"


def test_backends_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(InMemoryPreferenceStore(), PreferenceStore)
    assert isinstance(JsonFilePreferenceStore(tmp_path / "prefs.json"), PreferenceStore)


@pytest.mark.asyncio
async def test_memory_store_overwrites_values() -> None:
    store = InMemoryPreferenceStore()

    await store.set("k", "one")
    await store.set("k", "two")

    assert await store.get("k") == "two"
    assert await store.get("missing") is None
    assert store.set_calls == [("k", "one"), ("k", "two")]


@pytest.mark.asyncio
async def test_memory_store_injected_failures() -> None:
    store = InMemoryPreferenceStore({"k": "v"})
    store.read_error = OSError("disk gone")
    store.write_error = OSError("read only")

    with pytest.raises(OSError):
        await store.get("k")
    with pytest.raises(OSError):
        await store.set("k", "w")
    assert store.snapshot() == {"k": "v"}


@pytest.mark.asyncio
async def test_json_file_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    store = JsonFilePreferenceStore(path)

    assert await store.get("theme") is None
    await store.set("theme", '{"isDark": true}')
    await store.set("other", "x")
    await store.set("theme", '{"isDark": false}')

    reopened = JsonFilePreferenceStore(path)
    assert await reopened.get("theme") == '{"isDark": false}'
    assert json.loads(path.read_text(encoding="utf-8")) == {"other": "x", "theme": '{"isDark": false}'}
    assert not list(path.parent.glob("*.tmp"))


@pytest.mark.asyncio
async def test_json_file_store_read_errors_propagate(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("not json", encoding="utf-8")

    with pytest.raises(ValueError):
        await JsonFilePreferenceStore(path).get("theme")


@pytest.mark.asyncio
async def test_json_file_store_replaces_corrupt_file_on_write(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2", encoding="utf-8")
    store = JsonFilePreferenceStore(path)

    await store.set("theme", "value")

    assert await store.get("theme") == "value"
