"""sRGB color helpers: luminance, contrast, and simple channel adjustments."""

from __future__ import annotations

import math
from typing import Tuple

__all__ = [
    "AA_CONTRAST_THRESHOLD",
    "ColorTuple",
    "adjust_brightness",
    "contrast_ratio",
    "meets_aa",
    "parse_hex",
    "relative_luminance",
    "to_hex",
    "with_alpha",
]

ColorTuple = Tuple[int, int, int]

AA_CONTRAST_THRESHOLD = 4.5
_LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)


def parse_hex(value: str) -> ColorTuple:
    """Split a ``#RRGGBB`` string into its three 8-bit channels."""

    text = value.strip()
    if text.startswith("#"):
        text = text[1:]
    if len(text) != 6:
        raise ValueError(f"Unsupported color format: {value!r}")
    return tuple(int(text[i : i + 2], 16) for i in range(0, 6, 2))  # type: ignore[return-value]


def to_hex(value: ColorTuple) -> str:
    return "#" + "".join(f"{component:02X}" for component in value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _linearize(channel: int) -> float:
    c = channel / 255
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    """Return the WCAG relative luminance of ``color`` in ``[0, 1]``."""

    r, g, b = (_linearize(channel) for channel in parse_hex(color))
    wr, wg, wb = _LUMINANCE_WEIGHTS
    return wr * r + wg * g + wb * b


def contrast_ratio(first: str, second: str) -> float:
    """Return the symmetric contrast ratio between two colors (1 to 21)."""

    lum_a = relative_luminance(first)
    lum_b = relative_luminance(second)
    brightest = max(lum_a, lum_b)
    darkest = min(lum_a, lum_b)
    return (brightest + 0.05) / (darkest + 0.05)


def meets_aa(foreground: str, background: str) -> bool:
    """Whether the pair reaches the 4.5:1 body-text threshold."""

    return contrast_ratio(foreground, background) >= AA_CONTRAST_THRESHOLD


def with_alpha(color: str, alpha: float) -> str:
    """Append a two-digit uppercase alpha channel to ``color``.

    ``alpha`` is a fraction in ``[0, 1]``; ``0.5`` becomes ``80``.
    """

    alpha_hex = f"{_round_half_up(alpha * 255):02X}"
    return f"{color}{alpha_hex}"


def adjust_brightness(color: str, percent: float) -> str:
    """Lighten (positive) or darken (negative) every channel by ``percent``.

    Each channel moves by ``round(2.55 * percent)`` and is clamped to
    ``[0, 255]``. The result is an uppercase ``#RRGGBB`` triplet.
    """

    amount = _round_half_up(2.55 * percent)
    channels = tuple(_clamp_channel(channel + amount) for channel in parse_hex(color))
    return to_hex(channels)  # type: ignore[arg-type]


def _clamp_channel(value: int) -> int:
    if value < 1:
        return 0
    if value > 255:
        return 255
    return value
