"""Aggregate measurements for a decoded image."""

from __future__ import annotations

import logging

from ..config import DEFAULT_BACKGROUND, DEFAULT_CONTRAST_THRESHOLD
from ..io.models import Background, MeasurementResult
from .bounds import detect_content_box
from .center import calculate_visual_center
from .density import measure_pixel_density
from .pixels import PixelBuffer

logger = logging.getLogger(__name__)


def measure_image(pixels: PixelBuffer) -> MeasurementResult:
    """Return only the natural dimensions of *pixels*."""
    return MeasurementResult(width=pixels.width, height=pixels.height)


def measure_with_content_detection(
    pixels: PixelBuffer,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
    include_density: bool = False,
    background: Background = DEFAULT_BACKGROUND,
) -> MeasurementResult:
    """Detect the content box and visual centre, plus density when requested."""
    content_box, background = detect_content_box(pixels, contrast_threshold, background)
    visual_center = calculate_visual_center(
        pixels, content_box, background, contrast_threshold
    )
    density = None
    if include_density:
        density = measure_pixel_density(
            pixels, content_box, background, contrast_threshold
        )

    logger.debug(
        "Measured %dx%d image: box=%s center=%s density=%s",
        pixels.width,
        pixels.height,
        content_box,
        visual_center,
        density,
    )
    return MeasurementResult(
        width=pixels.width,
        height=pixels.height,
        content_box=content_box,
        visual_center=visual_center,
        pixel_density=density,
    )
