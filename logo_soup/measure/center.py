"""Perceptual centre of mass for logo content."""

from __future__ import annotations

import cv2
import numpy as np

from ..config import DEFAULT_BACKGROUND, DEFAULT_CONTRAST_THRESHOLD
from ..io.models import Background, BoundingBox, VisualCenter
from .pixels import PixelBuffer, content_mask


def pixel_weights(
    region: np.ndarray,
    background: Background = DEFAULT_BACKGROUND,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
) -> np.ndarray:
    """Return per-pixel visual weight: sqrt of colour distance scaled by opacity.

    Background pixels weigh nothing. The square root damps large pale fills so
    small high-contrast strokes still pull the centre towards them.
    """
    signed = region.astype(np.float64)
    delta = signed[..., :3] - np.asarray(background, dtype=np.float64)
    distance = np.sqrt(np.sum(delta * delta, axis=-1))
    weights = np.sqrt(distance) * (signed[..., 3] / 255.0)
    weights[~content_mask(region, background, contrast_threshold)] = 0.0
    return weights


def calculate_visual_center(
    pixels: PixelBuffer,
    content_box: BoundingBox,
    background: Background = DEFAULT_BACKGROUND,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
) -> VisualCenter:
    """Return the weighted centroid of *content_box* and its offset from the box centre."""
    center_x = content_box.x + content_box.width / 2
    center_y = content_box.y + content_box.height / 2

    region = pixels.region(content_box)
    if region.size == 0:
        return VisualCenter(center_x, center_y, 0.0, 0.0)

    moments = cv2.moments(pixel_weights(region, background, contrast_threshold))
    total_weight = moments["m00"]
    if total_weight == 0:
        return VisualCenter(center_x, center_y, 0.0, 0.0)

    # Moments use integer pixel coordinates; shift to pixel centres.
    local_x = moments["m10"] / total_weight + 0.5
    local_y = moments["m01"] / total_weight + 0.5

    return VisualCenter(
        x=content_box.x + local_x,
        y=content_box.y + local_y,
        offset_x=local_x - content_box.width / 2,
        offset_y=local_y - content_box.height / 2,
    )
