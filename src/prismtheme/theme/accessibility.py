"""WCAG AA checks across the foreground/background pairs a theme ships."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .color import contrast_ratio, meets_aa
from .models import ColorRole, Theme

__all__ = ["AccessibilityReport", "CHECKED_PAIRS", "ThemeAccessibilityError", "validate_theme"]

CHECKED_PAIRS: Tuple[Tuple[str, ColorRole, ColorRole], ...] = (
    ("text_on_background", ColorRole.TEXT, ColorRole.BACKGROUND),
    ("text_on_surface", ColorRole.TEXT, ColorRole.SURFACE),
    ("primary_on_background", ColorRole.PRIMARY, ColorRole.BACKGROUND),
    ("accent_on_background", ColorRole.ACCENT, ColorRole.BACKGROUND),
    ("text_secondary_on_background", ColorRole.TEXT_SECONDARY, ColorRole.BACKGROUND),
)


class ThemeAccessibilityError(ValueError):
    """Raised when a theme that must be compliant fails a contrast check."""


@dataclass(frozen=True, slots=True)
class AccessibilityReport:
    """Per-pair AA verdicts for one theme."""

    text_on_background: bool
    text_on_surface: bool
    primary_on_background: bool
    accent_on_background: bool
    text_secondary_on_background: bool
    ratios: Dict[str, float]

    @property
    def all_valid(self) -> bool:
        return all(self.results().values())

    def results(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name, _, _ in CHECKED_PAIRS}

    def failures(self) -> List[str]:
        return [name for name, passed in self.results().items() if not passed]

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = dict(self.results())
        payload["all_valid"] = self.all_valid
        payload["ratios"] = dict(self.ratios)
        return payload


def validate_theme(theme: Theme) -> AccessibilityReport:
    verdicts: Dict[str, bool] = {}
    ratios: Dict[str, float] = {}
    for name, foreground, background in CHECKED_PAIRS:
        fg = theme.color(foreground)
        bg = theme.color(background)
        verdicts[name] = meets_aa(fg, bg)
        ratios[name] = round(contrast_ratio(fg, bg), 2)
    return AccessibilityReport(ratios=ratios, **verdicts)
