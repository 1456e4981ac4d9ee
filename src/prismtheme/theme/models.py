"""Immutable value objects describing the light and dark themes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .color import parse_hex, to_hex

__all__ = [
    "BorderRadius",
    "ColorRole",
    "LEGACY_ALIASES",
    "Spacing",
    "Theme",
    "ThemeColors",
    "Typography",
    "TypographyStyle",
]


class ColorRole(str, Enum):
    """Canonical color roles every theme defines."""

    PRIMARY = "primary"
    ACCENT = "accent"
    BACKGROUND = "background"
    SURFACE = "surface"
    TEXT = "text"
    TEXT_SECONDARY = "textSecondary"
    BORDER = "border"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def attribute(self) -> str:
        return _ROLE_ATTRIBUTES[self]

    @classmethod
    def parse(cls, value: "ColorRole | str") -> "ColorRole":
        if isinstance(value, ColorRole):
            return value
        key = value.strip()
        for role in cls:
            if key == role.value or key == role.attribute:
                return role
        raise KeyError(f"Unknown color role '{value}'")


_ROLE_ATTRIBUTES: Dict[ColorRole, str] = {
    ColorRole.PRIMARY: "primary",
    ColorRole.ACCENT: "accent",
    ColorRole.BACKGROUND: "background",
    ColorRole.SURFACE: "surface",
    ColorRole.TEXT: "text",
    ColorRole.TEXT_SECONDARY: "text_secondary",
    ColorRole.BORDER: "border",
    ColorRole.SUCCESS: "success",
    ColorRole.WARNING: "warning",
    ColorRole.ERROR: "error",
}

# Legacy names kept for older call sites. Values name the default role each
# alias reads from; ``ThemeColors.alias_source`` may redirect one per theme.
LEGACY_ALIASES: Dict[str, ColorRole] = {
    "tint": ColorRole.PRIMARY,
    "icon": ColorRole.TEXT_SECONDARY,
    "tabIconDefault": ColorRole.TEXT_SECONDARY,
    "tabIconSelected": ColorRole.PRIMARY,
}
_ALIAS_ATTRIBUTES = {
    "tint": "tint",
    "icon": "icon",
    "tab_icon_default": "tabIconDefault",
    "tab_icon_selected": "tabIconSelected",
}


def _normalize_hex(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Colors must be hex strings, received {type(value)!r}")
    return to_hex(parse_hex(value))


@dataclass(frozen=True, slots=True)
class ThemeColors:
    """Palette for one theme keyed by :class:`ColorRole`."""

    primary: str
    accent: str
    background: str
    surface: str
    text: str
    text_secondary: str
    border: str
    success: str
    warning: str
    error: str
    alias_source: Mapping[str, ColorRole] = field(default_factory=lambda: dict(LEGACY_ALIASES), hash=False)

    def __post_init__(self) -> None:
        for role in ColorRole:
            object.__setattr__(self, role.attribute, _normalize_hex(getattr(self, role.attribute)))
        sources = dict(LEGACY_ALIASES)
        for alias, role in dict(self.alias_source).items():
            if alias not in LEGACY_ALIASES:
                raise KeyError(f"Unknown legacy alias '{alias}'")
            sources[alias] = ColorRole.parse(role)
        object.__setattr__(self, "alias_source", MappingProxyType(sources))

    def get(self, role: ColorRole | str) -> str:
        """Look up a canonical role or a legacy alias name."""

        if isinstance(role, str):
            alias = _ALIAS_ATTRIBUTES.get(role, role)
            if alias in self.alias_source:
                return getattr(self, self.alias_source[alias].attribute)
        return getattr(self, ColorRole.parse(role).attribute)

    @property
    def tint(self) -> str:
        return self.get("tint")

    @property
    def icon(self) -> str:
        return self.get("icon")

    @property
    def tab_icon_default(self) -> str:
        return self.get("tabIconDefault")

    @property
    def tab_icon_selected(self) -> str:
        return self.get("tabIconSelected")

    def to_dict(self, *, include_aliases: bool = True) -> Dict[str, str]:
        payload = {role.value: self.get(role) for role in ColorRole}
        if include_aliases:
            payload.update({alias: self.get(alias) for alias in LEGACY_ALIASES})
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ThemeColors":
        values: Dict[str, Any] = {}
        for role in ColorRole:
            value = payload.get(role.value, payload.get(role.attribute))
            if value is None:
                raise ValueError(f"Theme colors missing role '{role.value}'")
            values[role.attribute] = value
        sources: Dict[str, ColorRole] = {}
        for alias in LEGACY_ALIASES:
            color = payload.get(alias)
            if color is None:
                continue
            sources[alias] = _alias_role_for(alias, _normalize_hex(color), values)
        return cls(**values, alias_source=sources)


def _alias_role_for(alias: str, color: str, values: Mapping[str, Any]) -> ColorRole:
    default = LEGACY_ALIASES[alias]
    if _normalize_hex(values[default.attribute]) == color:
        return default
    for role in ColorRole:
        if _normalize_hex(values[role.attribute]) == color:
            return role
    raise ValueError(f"Legacy alias '{alias}' must match one of the canonical role colors")


@dataclass(frozen=True, slots=True)
class Spacing:
    xs: int = 4
    sm: int = 8
    md: int = 16
    lg: int = 24
    xl: int = 32
    xxl: int = 48


@dataclass(frozen=True, slots=True)
class BorderRadius:
    sm: int = 8
    md: int = 12
    lg: int = 16
    xl: int = 24


@dataclass(frozen=True, slots=True)
class TypographyStyle:
    """Font size, weight and line height for one text role."""

    size: int
    weight: str
    line_height: int

    def to_dict(self) -> Dict[str, Any]:
        return {"fontSize": self.size, "fontWeight": self.weight, "lineHeight": self.line_height}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TypographyStyle":
        return cls(
            size=int(payload.get("fontSize", payload.get("size", 0))),
            weight=str(payload.get("fontWeight", payload.get("weight", "normal"))),
            line_height=int(payload.get("lineHeight", payload.get("line_height", 0))),
        )


@dataclass(frozen=True, slots=True)
class Typography:
    h1: TypographyStyle = TypographyStyle(32, "bold", 40)
    h2: TypographyStyle = TypographyStyle(24, "600", 32)
    body: TypographyStyle = TypographyStyle(16, "normal", 24)
    caption: TypographyStyle = TypographyStyle(12, "normal", 16)
    button: TypographyStyle = TypographyStyle(16, "600", 20)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {item.name: getattr(self, item.name).to_dict() for item in fields(self)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Typography":
        known = {item.name for item in fields(cls)}
        styles = {
            name: TypographyStyle.from_dict(value)
            for name, value in payload.items()
            if name in known and isinstance(value, Mapping)
        }
        return cls(**styles)


def _scale_from_dict(cls: type, payload: Mapping[str, Any] | None) -> Any:
    if not payload:
        return cls()
    known = {item.name for item in fields(cls)}
    return cls(**{key: int(value) for key, value in payload.items() if key in known})


def _scale_to_dict(value: Any) -> Dict[str, int]:
    return {item.name: getattr(value, item.name) for item in fields(value)}


@dataclass(frozen=True, slots=True)
class Theme:
    """A complete visual description: palette, spacing, radii, typography."""

    name: str
    colors: ThemeColors
    spacing: Spacing = field(default_factory=Spacing)
    border_radius: BorderRadius = field(default_factory=BorderRadius)
    typography: Typography = field(default_factory=Typography)

    def color(self, role: ColorRole | str) -> str:
        return self.colors.get(role)

    def with_colors(self, **changes: str) -> "Theme":
        """Return a copy with some canonical roles replaced."""

        return replace(self, colors=replace(self.colors, **changes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "colors": self.colors.to_dict(),
            "spacing": _scale_to_dict(self.spacing),
            "borderRadius": _scale_to_dict(self.border_radius),
            "typography": self.typography.to_dict(),
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Theme":
        colors = payload.get("colors")
        if not isinstance(colors, Mapping):
            raise ValueError("Theme payload missing 'colors'")
        typography = payload.get("typography")
        return cls(
            name=str(payload.get("name") or "custom"),
            colors=ThemeColors.from_dict(colors),
            spacing=_scale_from_dict(Spacing, payload.get("spacing")),
            border_radius=_scale_from_dict(
                BorderRadius, payload.get("borderRadius", payload.get("border_radius"))
            ),
            typography=Typography.from_dict(typography) if isinstance(typography, Mapping) else Typography(),
        )

    @classmethod
    def from_json(cls, text: str) -> "Theme":
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise ValueError("Theme JSON root must be an object")
        return cls.from_dict(data)
