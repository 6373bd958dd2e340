"""Detection of the tight box around a logo's visible content."""

from __future__ import annotations

import logging

import cv2
import numpy as np

from ..config import DEFAULT_BACKGROUND, DEFAULT_CONTRAST_THRESHOLD
from ..io.models import Background, BoundingBox
from .pixels import PixelBuffer, content_mask

logger = logging.getLogger(__name__)


def detect_content_box(
    pixels: PixelBuffer,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
    background: Background = DEFAULT_BACKGROUND,
) -> tuple[BoundingBox, Background]:
    """Return the smallest box holding every content pixel, and the background used.

    Images without any content pixel resolve to the full image extent rather
    than an empty box, so later stages always receive a usable region.
    """
    if pixels.width == 0 or pixels.height == 0:
        return pixels.full_box, background

    mask = content_mask(pixels.data, background, contrast_threshold)
    if not mask.any():
        logger.debug(
            "No content pixels in %dx%d image; using full extent",
            pixels.width,
            pixels.height,
        )
        return pixels.full_box, background

    x, y, width, height = cv2.boundingRect(mask.astype(np.uint8))
    return BoundingBox(int(x), int(y), int(width), int(height)), background
