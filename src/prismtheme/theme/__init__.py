"""Theme module consolidating color math, palettes and accessibility checks."""

from .accessibility import AccessibilityReport, ThemeAccessibilityError, validate_theme
from .catalog import (
    COLORS,
    DARK_THEME,
    LIGHT_THEME,
    build_dark_theme,
    build_light_theme,
    export_theme,
    load_theme_file,
    theme_for,
    verify_catalog,
)
from .color import adjust_brightness, contrast_ratio, meets_aa, relative_luminance, with_alpha
from .models import ColorRole, Theme, ThemeColors, Typography, TypographyStyle

__all__ = [
    "AccessibilityReport",
    "COLORS",
    "ColorRole",
    "DARK_THEME",
    "LIGHT_THEME",
    "Theme",
    "ThemeAccessibilityError",
    "ThemeColors",
    "Typography",
    "TypographyStyle",
    "adjust_brightness",
    "build_dark_theme",
    "build_light_theme",
    "contrast_ratio",
    "export_theme",
    "load_theme_file",
    "meets_aa",
    "relative_luminance",
    "theme_for",
    "validate_theme",
    "verify_catalog",
    "with_alpha",
]
