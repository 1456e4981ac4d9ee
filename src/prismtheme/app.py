"""Command line entry point for inspecting and toggling the theme preference."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, TextIO, get_args, get_origin, get_type_hints

from .services.settings import Settings, SettingsStore
from .services.storage import JsonFilePreferenceStore
from .theme.accessibility import AccessibilityReport, validate_theme
from .theme.catalog import DARK_THEME, LIGHT_THEME, load_theme_file
from .theme.color import contrast_ratio, meets_aa
from .theme.models import Theme
from .ui.theme_resolver import ThemeResolver
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False, *, log_dir: str | None = None, force: bool = False) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging_utils.setup_logging(level, log_dir=log_dir, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Dict[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        return active_store.load(overrides=overrides)
    except Exception as exc:  # pragma: no cover - defensive path
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        return Settings()


def build_resolver(settings: Settings) -> ThemeResolver:
    store = JsonFilePreferenceStore(settings.storage_path)
    return ThemeResolver(store, platform_scheme=settings.color_scheme, storage_key=settings.storage_key)


def main(argv: Sequence[str] | None = None, *, stream: TextIO | None = None) -> int:
    """Entry point invoked by the `prismtheme` console script."""

    out = stream or sys.stdout
    args = _parse_cli_args(argv)

    try:
        cli_overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2

    settings_path = args.settings_path or os.environ.get("PRISMTHEME_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    settings = load_settings(resolved_path, overrides=cli_overrides or None)
    configure_logging(args.debug or settings.debug_logging, log_dir=settings.log_dir)

    if args.command == "contrast":
        return _run_contrast(args.foreground, args.background, out)
    if args.command == "validate":
        return _run_validate(args.theme_file, out)
    if args.command == "toggle":
        state = asyncio.run(_toggle(settings))
    else:
        state = asyncio.run(_show(settings))
    print(f"mode: {'dark' if state['is_dark'] else 'light'}", file=out)
    print(f"theme: {state['theme']}", file=out)
    return 0


async def _show(settings: Settings) -> Dict[str, Any]:
    resolver = build_resolver(settings)
    await resolver.load()
    return {"is_dark": resolver.is_dark, "theme": resolver.theme.name}


async def _toggle(settings: Settings) -> Dict[str, Any]:
    resolver = build_resolver(settings)
    await resolver.load()
    resolver.toggle_theme()
    await resolver.wait_for_writes()
    return {"is_dark": resolver.is_dark, "theme": resolver.theme.name}


def _run_contrast(foreground: str, background: str, out: TextIO) -> int:
    try:
        ratio = contrast_ratio(foreground, background)
    except ValueError as exc:
        print(f"Invalid color: {exc}", file=sys.stderr)
        return 2
    verdict = "pass" if meets_aa(foreground, background) else "fail"
    print(f"contrast: {ratio:.2f}:1", file=out)
    print(f"AA: {verdict}", file=out)
    return 0


def _run_validate(theme_file: str | None, out: TextIO) -> int:
    themes: list[Theme]
    if theme_file:
        try:
            themes = [load_theme_file(theme_file)]
        except (OSError, ValueError, KeyError) as exc:
            print(f"Could not read theme file: {exc}", file=sys.stderr)
            return 2
    else:
        themes = [LIGHT_THEME, DARK_THEME]

    reports: Dict[str, AccessibilityReport] = {theme.name: validate_theme(theme) for theme in themes}
    payload = {name: report.to_dict() for name, report in reports.items()}
    print(json.dumps(payload, indent=2), file=out)
    return 0 if all(report.all_valid for report in reports.values()) else 1


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="prismtheme",
        description="Inspect, toggle and validate the light/dark theme preference.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.prismtheme/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("show", help="Print the resolved theme mode.")
    commands.add_parser("toggle", help="Flip the theme mode and persist it.")
    validate = commands.add_parser("validate", help="Check WCAG AA contrast for a theme.")
    validate.add_argument("theme_file", nargs="?", help="JSON or YAML theme file; defaults to the shipped themes.")
    contrast = commands.add_parser("contrast", help="Print the contrast ratio of two colors.")
    contrast.add_argument("foreground", help="Foreground color as #RRGGBB.")
    contrast.add_argument("background", help="Background color as #RRGGBB.")
    return parser.parse_args(argv)


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    fields = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in fields:
            raise ValueError(f"Unknown setting '{key}'.")
        annotation = type_hints.get(key, fields[key].type)
        overrides[key] = _coerce_value(annotation, raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    target = _resolve_annotation(annotation)
    normalized = raw_value.strip()

    if normalized.lower() in {"none", "null"}:
        return None
    if target is bool:
        return _parse_bool(normalized)
    return normalized


def _resolve_annotation(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is None:
        return annotation
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if not args:
        return origin
    return args[0]


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
