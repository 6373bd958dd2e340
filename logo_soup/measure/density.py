"""Ink density: how filled and opaque a mark is within its box."""

from __future__ import annotations

import numpy as np

from ..config import DEFAULT_BACKGROUND, DEFAULT_CONTRAST_THRESHOLD, NEUTRAL_DENSITY
from ..io.models import Background, BoundingBox
from .pixels import PixelBuffer, content_mask


def measure_pixel_density(
    pixels: PixelBuffer,
    content_box: BoundingBox | None = None,
    background: Background | None = None,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
) -> float:
    """Return ``coverage * average opacity`` of content pixels inside the box.

    The whole image is used when no box is given. An empty region yields the
    neutral density so callers never see a missing value.
    """
    box = content_box or pixels.full_box
    region = pixels.region(box)
    total_pixels = region.shape[0] * region.shape[1]
    if total_pixels == 0:
        return NEUTRAL_DENSITY

    mask = content_mask(region, background or DEFAULT_BACKGROUND, contrast_threshold)
    filled = int(np.count_nonzero(mask))
    if filled == 0:
        return 0.0

    opacity_sum = float(np.sum(region[..., 3][mask], dtype=np.float64)) / 255.0
    coverage = filled / total_pixels
    return coverage * (opacity_sum / filled)
