"""Aspect-ratio and density driven display sizing."""

from __future__ import annotations

import math
from typing import Any, Mapping

from ..config import (
    DENSITY_SCALE_MAX,
    DENSITY_SCALE_MIN,
    REFERENCE_DENSITY,
)
from ..io.models import LogoSource, MeasurementResult, NormalizedLogo


def normalize_source(source: str | LogoSource | Mapping[str, Any]) -> LogoSource:
    """Return *source* as a :class:`LogoSource`, defaulting ``alt`` to empty."""
    if isinstance(source, LogoSource):
        return source
    if isinstance(source, str):
        return LogoSource(src=source, alt="")
    if isinstance(source, Mapping):
        src = source.get("src")
        if not isinstance(src, str) or not src:
            raise ValueError("Logo source mappings require a non-empty 'src'")
        return LogoSource(src=src, alt=str(source.get("alt") or ""))
    raise TypeError(f"Unsupported logo source type: {type(source).__name__}")


def content_dimensions(measurement: MeasurementResult) -> tuple[int, int]:
    """Return the content box size when known, else the natural image size."""
    if measurement.content_box is not None:
        return measurement.content_box.width, measurement.content_box.height
    return measurement.width, measurement.height


def density_scale(density: float, density_factor: float) -> float:
    """Return the clamped multiplier compensating for visual weight."""
    density_ratio = density / REFERENCE_DENSITY
    if density_ratio <= 0:
        return DENSITY_SCALE_MAX
    scale = (1.0 / density_ratio) ** (density_factor * 0.5)
    return max(DENSITY_SCALE_MIN, min(DENSITY_SCALE_MAX, scale))


def calculate_normalized_dimensions(
    measurement: MeasurementResult,
    base_size: float,
    scale_factor: float,
    density_factor: float = 0.0,
) -> tuple[float, float]:
    """Return ``(width, height)`` in display pixels for *measurement*.

    Sizes are rounded to whole pixels, except that content with zero area
    falls back to exactly ``(base_size, base_size)``.

    ``scale_factor`` interpolates between equal widths (0) and equal heights (1);
    around 0.5 the logos end up with comparable area. When ``density_factor`` is
    positive and a density was measured, dense marks shrink and sparse marks
    grow, within a factor of two either way.
    """
    content_width, content_height = content_dimensions(measurement)
    if content_width == 0 or content_height == 0:
        return base_size, base_size

    aspect_ratio = content_width / content_height
    width = aspect_ratio**scale_factor * base_size
    height = width / aspect_ratio

    if density_factor > 0 and measurement.pixel_density is not None:
        scale = density_scale(measurement.pixel_density, density_factor)
        width *= scale
        height *= scale

    return _round_half_up(width), _round_half_up(height)


def create_normalized_logo(
    source: LogoSource,
    measurement: MeasurementResult,
    base_size: float,
    scale_factor: float,
    density_factor: float = 0.0,
) -> NormalizedLogo:
    """Combine *source* and *measurement* into a display-ready record."""
    width, height = calculate_normalized_dimensions(
        measurement, base_size, scale_factor, density_factor
    )
    content_width, content_height = content_dimensions(measurement)

    return NormalizedLogo(
        src=source.src,
        alt=source.alt or "",
        original_width=measurement.width,
        original_height=measurement.height,
        normalized_width=width,
        normalized_height=height,
        aspect_ratio=content_width / content_height if content_height > 0 else 1.0,
        content_box=measurement.content_box,
        pixel_density=measurement.pixel_density,
        visual_center=measurement.visual_center,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
