"""Theme events and the bus the resolver publishes them on."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, List, Optional, TypeVar
from weakref import WeakMethod

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from ..theme.models import Theme

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")

Handler = Callable[[E], None]
_Resolve = Callable[[], Optional[Callable[[Any], None]]]


@dataclass(slots=True)
class Event:
    """Base class for resolver events."""


@dataclass(slots=True)
class ThemeLoaded(Event):
    """Published once, when the resolver leaves the loading state.

    ``source`` is ``"stored"`` when a persisted record was adopted and
    ``"platform"`` when the platform default applies.
    """

    is_dark: bool
    source: str


@dataclass(slots=True)
class ThemeChanged(Event):
    """Published whenever the visible theme flips."""

    is_dark: bool
    theme: "Theme"


def _reference(handler: Callable[[Any], None]) -> _Resolve:
    # Observers that subscribe a bound method must not be kept alive by it.
    if inspect.ismethod(handler):
        return WeakMethod(handler)
    return lambda: handler


def _describe(handler: Callable[[Any], None]) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventBus(Generic[E]):
    """Dispatches resolver events to observers keyed by event class.

    Observers run synchronously in subscription order on the caller's
    thread. One failing observer is logged and does not stop the rest.
    """

    __slots__ = ("_observers",)

    def __init__(self) -> None:
        self._observers: Dict[type, List[_Resolve]] = {}

    def subscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        self._observers.setdefault(event_type, []).append(_reference(handler))
        logger.debug("%s observes %s", _describe(handler), event_type.__name__)

    def unsubscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Drop one registration of ``handler``; unknown handlers are ignored."""

        entries = self._observers.get(event_type, [])
        for index, resolve in enumerate(entries):
            if resolve() == handler:
                del entries[index]
                return

    def publish(self, event: E) -> None:
        entries = self._observers.get(type(event))
        if not entries:
            return
        for resolve in list(entries):
            handler = resolve()
            if handler is None:
                continue
            try:
                handler(event)
            except Exception:
                logger.exception("Observer %s failed on %s", _describe(handler), type(event).__name__)
        entries[:] = [resolve for resolve in entries if resolve() is not None]


__all__ = [
    "Event",
    "EventBus",
    "Handler",
    "ThemeChanged",
    "ThemeLoaded",
]
