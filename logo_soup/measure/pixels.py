"""Decoded pixel storage and content/background classification."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from ..config import DEFAULT_BACKGROUND, DEFAULT_CONTRAST_THRESHOLD
from ..io.models import Background, BoundingBox


@dataclass(frozen=True, slots=True, eq=False)
class PixelBuffer:
    """Read-only RGBA pixels laid out as ``(height, width, 4)``, origin top-left."""

    data: np.ndarray

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """Copy *array* into a new immutable buffer after validating its layout."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(
                f"Pixel data must have shape (height, width, 4); got {arr.shape}"
            )
        if arr.dtype != np.uint8:
            if arr.size and (arr.min() < 0 or arr.max() > 255):
                raise ValueError("Pixel channels must lie within 0-255")
            arr = arr.astype(np.uint8)
        copy = np.array(arr, dtype=np.uint8, copy=True, order="C")
        copy.setflags(write=False)
        return cls(copy)

    @classmethod
    def from_image(cls, img: Image.Image) -> PixelBuffer:
        """Return the RGBA pixels of a Pillow image."""
        rgba = img.convert("RGBA") if img.mode != "RGBA" else img
        return cls.from_array(np.asarray(rgba))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def full_box(self) -> BoundingBox:
        return BoundingBox(0, 0, self.width, self.height)

    def region(self, box: BoundingBox) -> np.ndarray:
        """Return the pixels inside *box*, clipped to the buffer."""
        x0 = min(max(0, box.x), self.width)
        y0 = min(max(0, box.y), self.height)
        x1 = min(max(x0, box.x + box.width), self.width)
        y1 = min(max(y0, box.y + box.height), self.height)
        return self.data[y0:y1, x0:x1]

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.data.copy())


def is_content_pixel(
    r: int,
    g: int,
    b: int,
    a: int,
    background: Background = DEFAULT_BACKGROUND,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
) -> bool:
    """Return ``True`` when the pixel is opaque enough and differs from *background*."""
    if a <= contrast_threshold:
        return False
    br, bg, bb = background
    return (
        abs(r - br) > contrast_threshold
        or abs(g - bg) > contrast_threshold
        or abs(b - bb) > contrast_threshold
    )


def content_mask(
    pixels: np.ndarray,
    background: Background = DEFAULT_BACKGROUND,
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD,
) -> np.ndarray:
    """Vectorised :func:`is_content_pixel` over an ``(h, w, 4)`` region."""
    signed = pixels.astype(np.int16)
    opaque = signed[..., 3] > contrast_threshold
    distance = np.abs(signed[..., :3] - np.asarray(background, dtype=np.int16))
    contrast = np.any(distance > contrast_threshold, axis=-1)
    return opaque & contrast
