"""Cropping decoded logos down to their content box."""

from __future__ import annotations

import base64
import logging
from io import BytesIO

from ..io.models import BoundingBox
from ..measure.pixels import PixelBuffer

logger = logging.getLogger(__name__)


def crop_to_data_url(pixels: PixelBuffer, content_box: BoundingBox, fallback_src: str) -> str:
    """Return the content region of *pixels* as a PNG data URI.

    When the region is empty or cannot be encoded, *fallback_src* is returned
    so the caller keeps showing the uncropped image.
    """
    region = PixelBuffer.from_array(pixels.region(content_box))
    if region.width == 0 or region.height == 0:
        logger.debug("Empty crop region %s; keeping original source", content_box)
        return fallback_src

    buffer = BytesIO()
    try:
        with region.to_image() as img:
            img.save(buffer, format="PNG")
    except (OSError, ValueError):
        logger.debug("Failed to encode crop for %s", content_box, exc_info=True)
        return fallback_src

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
