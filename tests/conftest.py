"""Shared fixtures for logo_soup tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from logo_soup.io.models import BoundingBox
from logo_soup.measure.pixels import PixelBuffer

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)

PixelFactory = Callable[..., PixelBuffer]


def _build(
    width: int,
    height: int,
    fill: tuple[int, int, int, int] = WHITE,
    shapes: list[tuple[BoundingBox, tuple[int, int, int, int]]] | None = None,
) -> PixelBuffer:
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[...] = fill
    for box, color in shapes or []:
        arr[box.y : box.y + box.height, box.x : box.x + box.width] = color
    return PixelBuffer.from_array(arr)


@pytest.fixture
def make_pixels() -> PixelFactory:
    """Return a factory painting rectangles onto a filled canvas."""
    return _build


@pytest.fixture
def write_png(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that saves a synthetic logo as PNG under ``tmp_path``."""

    def _write(
        name: str,
        width: int,
        height: int,
        fill: tuple[int, int, int, int] = WHITE,
        shapes: list[tuple[BoundingBox, tuple[int, int, int, int]]] | None = None,
    ) -> Path:
        pixels = _build(width, height, fill, shapes)
        path = tmp_path / name
        Image.fromarray(pixels.data.copy()).save(path, format="PNG")
        return path

    return _write
