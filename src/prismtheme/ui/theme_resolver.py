"""Light/dark preference state machine backed by an async key-value store."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Set

from ..services.preferences import (
    PREFERENCE_STORAGE_KEY,
    PreferenceRecord,
    PreferenceStorageError,
    StorageReadFailure,
    StorageWriteFailure,
    utcnow,
)
from ..services.storage import PreferenceStore
from ..theme.catalog import theme_for
from ..theme.models import Theme
from .events import Event, EventBus, Handler, ThemeChanged, ThemeLoaded

__all__ = [
    "ColorScheme",
    "ResolverPhase",
    "ResolverState",
    "ThemeResolver",
    "resolve_color_scheme",
]

LOGGER = logging.getLogger(__name__)


class ColorScheme(str, Enum):
    """Color scheme reported by the host platform."""

    LIGHT = "light"
    DARK = "dark"
    UNKNOWN = "unknown"

    @property
    def is_dark(self) -> bool:
        return self is ColorScheme.DARK


def resolve_color_scheme(value: Any) -> ColorScheme:
    """Map a raw platform signal onto :class:`ColorScheme`; anything unrecognized is unknown."""

    if isinstance(value, ColorScheme):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for scheme in ColorScheme:
            if key == scheme.value:
                return scheme
    return ColorScheme.UNKNOWN


class ResolverPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class ResolverState:
    is_dark: bool
    is_loading: bool


class ThemeResolver:
    """Reconciles the stored preference, the platform default and user toggles.

    The resolver starts seeded from the platform scheme, performs exactly one
    read of the stored record, then settles in ``READY``. Until then neither
    theme is final: the outcome of the read overrides the seed and any toggle
    made in the meantime. Toggles update the
    in-memory flag synchronously and persist the new value in the background
    without waiting for, serializing, or rolling back on the write.
    """

    def __init__(
        self,
        store: PreferenceStore,
        *,
        platform_scheme: ColorScheme | str | None = None,
        storage_key: str = PREFERENCE_STORAGE_KEY,
        bus: EventBus[Event] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._storage_key = storage_key
        self._platform_scheme = resolve_color_scheme(platform_scheme)
        self._bus: EventBus[Event] = bus or EventBus()
        self._clock = clock or utcnow
        self._phase = ResolverPhase.UNINITIALIZED
        self._is_dark = self._platform_scheme.is_dark
        self._load_task: Optional[asyncio.Task[ResolverState]] = None
        self._pending_writes: Set[asyncio.Task[bool]] = set()
        self._last_error: PreferenceStorageError | None = None

    # ------------------------------------------------------------------
    # Consumer surface
    # ------------------------------------------------------------------
    @property
    def theme(self) -> Theme:
        return theme_for(self._is_dark)

    @property
    def is_dark(self) -> bool:
        return self._is_dark

    @property
    def is_loading(self) -> bool:
        return self._phase is not ResolverPhase.READY

    @property
    def phase(self) -> ResolverPhase:
        return self._phase

    @property
    def state(self) -> ResolverState:
        return ResolverState(is_dark=self._is_dark, is_loading=self.is_loading)

    @property
    def platform_scheme(self) -> ColorScheme:
        return self._platform_scheme

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def last_error(self) -> PreferenceStorageError | None:
        """Most recent storage failure, kept for diagnostics only."""

        return self._last_error

    @property
    def pending_writes(self) -> int:
        return len(self._pending_writes)

    def subscribe(self, event_type: type[Event], handler: Handler[Any]) -> None:
        self._bus.subscribe(event_type, handler)

    def unsubscribe(self, event_type: type[Event], handler: Handler[Any]) -> None:
        self._bus.unsubscribe(event_type, handler)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> asyncio.Task[ResolverState]:
        """Enter ``LOADING`` and schedule the single preference read.

        Must be called from a running event loop. Later calls return the
        task created by the first one.
        """

        if self._load_task is None:
            loop = asyncio.get_running_loop()
            self._phase = ResolverPhase.LOADING
            LOGGER.debug(
                "Theme resolver loading (platform=%s, seed is_dark=%s)",
                self._platform_scheme.value,
                self._is_dark,
            )
            self._load_task = loop.create_task(self._load())
        return self._load_task

    async def load(self) -> ResolverState:
        return await self.start()

    def toggle_theme(self) -> None:
        """Flip the theme now and persist the new choice in the background."""

        new_value = not self._is_dark
        self._is_dark = new_value
        LOGGER.debug("Theme toggled (is_dark=%s)", new_value)
        self._bus.publish(ThemeChanged(is_dark=new_value, theme=self.theme))

        record = PreferenceRecord(is_dark=new_value, last_updated=self._clock())
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            LOGGER.warning("Failed to save theme preference: no running event loop")
            return
        task = loop.create_task(self._save(record))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def wait_for_writes(self) -> None:
        """Wait until every write issued so far has landed or failed."""

        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    # ------------------------------------------------------------------
    # Storage round trips
    # ------------------------------------------------------------------
    async def _load(self) -> ResolverState:
        stored: bool | None = None
        try:
            record = await self._read_record()
            if record is not None:
                stored = record.is_dark
        except PreferenceStorageError as exc:
            self._last_error = exc
            LOGGER.warning("Failed to load theme preference: %s", exc)
        finally:
            self._finish_loading(stored)
        return self.state

    async def _read_record(self) -> PreferenceRecord | None:
        try:
            raw = await self._store.get(self._storage_key)
        except Exception as exc:
            raise StorageReadFailure(
                f"Could not read '{self._storage_key}': {exc}", key=self._storage_key
            ) from exc
        if not raw:
            return None
        return PreferenceRecord.decode(raw, key=self._storage_key)

    def _finish_loading(self, stored: bool | None) -> None:
        # The load result replaces any toggle made while loading; that
        # toggle's write may still land afterwards.
        previous = self._is_dark
        if stored is not None:
            source = "stored"
            self._is_dark = stored
        else:
            source = "platform"
            self._is_dark = self._platform_scheme.is_dark
        self._phase = ResolverPhase.READY
        LOGGER.debug("Theme resolver ready (is_dark=%s, source=%s)", self._is_dark, source)
        self._bus.publish(ThemeLoaded(is_dark=self._is_dark, source=source))
        if self._is_dark != previous:
            self._bus.publish(ThemeChanged(is_dark=self._is_dark, theme=self.theme))

    async def _save(self, record: PreferenceRecord) -> bool:
        try:
            await self._write_record(record)
        except StorageWriteFailure as exc:
            self._last_error = exc
            LOGGER.warning("Failed to save theme preference: %s", exc)
            return False
        return True

    async def _write_record(self, record: PreferenceRecord) -> None:
        try:
            await self._store.set(self._storage_key, record.encode())
        except Exception as exc:
            raise StorageWriteFailure(
                f"Could not write '{self._storage_key}': {exc}", key=self._storage_key
            ) from exc
