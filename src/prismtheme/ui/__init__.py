"""Consumer-facing state: the theme resolver and its events."""

from .events import Event, EventBus, ThemeChanged, ThemeLoaded
from .theme_resolver import ColorScheme, ResolverPhase, ResolverState, ThemeResolver, resolve_color_scheme

__all__ = [
    "ColorScheme",
    "Event",
    "EventBus",
    "ResolverPhase",
    "ResolverState",
    "ThemeChanged",
    "ThemeLoaded",
    "ThemeResolver",
    "resolve_color_scheme",
]
