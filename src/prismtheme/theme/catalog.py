"""The two shipped themes plus helpers for reading and writing theme files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from ruamel.yaml import YAML

from .accessibility import ThemeAccessibilityError, validate_theme
from .models import ColorRole, Theme, ThemeColors

__all__ = [
    "COLORS",
    "DARK_THEME",
    "LIGHT_THEME",
    "build_dark_theme",
    "build_light_theme",
    "export_theme",
    "load_theme_file",
    "theme_for",
    "verify_catalog",
]

LOGGER = logging.getLogger(__name__)

_STATUS_COLORS: Dict[str, str] = {
    "success": "#4CAF50",
    "warning": "#FF9800",
    "error": "#F44336",
}


def build_light_theme() -> Theme:
    return Theme(
        name="light",
        colors=ThemeColors(
            primary="#3F51B5",
            accent="#00695C",
            background="#F3F7FA",
            surface="#FFFFFF",
            text="#1A1A1A",
            text_secondary="#666666",
            border="#E0E0E0",
            **_STATUS_COLORS,
        ),
    )


def build_dark_theme() -> Theme:
    return Theme(
        name="dark",
        colors=ThemeColors(
            primary="#7986CB",
            accent="#64FFDA",
            background="#121212",
            surface="#1E1E1E",
            text="#FFFFFF",
            text_secondary="#B0B0B0",
            border="#333333",
            alias_source={"tint": ColorRole.TEXT, "tabIconSelected": ColorRole.TEXT},
            **_STATUS_COLORS,
        ),
    )


def verify_catalog(*themes: Theme) -> None:
    """Raise :class:`ThemeAccessibilityError` if a shipped theme fails AA."""

    for theme in themes or (LIGHT_THEME, DARK_THEME):
        report = validate_theme(theme)
        if not report.all_valid:
            raise ThemeAccessibilityError(
                f"Theme '{theme.name}' fails contrast checks: {', '.join(report.failures())}"
            )
        LOGGER.debug("Theme '%s' passed contrast checks: %s", theme.name, report.ratios)


LIGHT_THEME = build_light_theme()
DARK_THEME = build_dark_theme()
verify_catalog(LIGHT_THEME, DARK_THEME)

# Mapping kept for call sites that index palettes by scheme name.
COLORS: Mapping[str, Dict[str, str]] = {
    "light": LIGHT_THEME.colors.to_dict(),
    "dark": DARK_THEME.colors.to_dict(),
}


def theme_for(is_dark: bool) -> Theme:
    return DARK_THEME if is_dark else LIGHT_THEME


def load_theme_file(source: str | Path) -> Theme:
    """Read a custom theme description from JSON or YAML."""

    path = Path(source)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        payload: Any = json.loads(text)
    elif suffix in {".yaml", ".yml"}:
        payload = YAML(typ="safe").load(text)
    else:
        raise ValueError(f"Unsupported theme file type: {path.suffix or path.name}")
    if not isinstance(payload, Mapping):
        raise ValueError("Theme file must contain a mapping at its root")
    payload = dict(payload)
    payload.setdefault("name", path.stem)
    return Theme.from_dict(payload)


def export_theme(theme: Theme, destination: str | Path, *, indent: int = 2) -> Path:
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(theme.to_json(indent=indent), encoding="utf-8")
    return path
