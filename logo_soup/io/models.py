"""Data models shared across the logo normalization pipeline."""

from __future__ import annotations

from dataclasses import dataclass

Background = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class LogoSource:
    """Identity of a logo image: where it comes from and how to describe it."""

    src: str
    alt: str = ""


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned pixel region in source image coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return max(0, self.width) * max(0, self.height)


@dataclass(frozen=True, slots=True)
class VisualCenter:
    """Weighted centroid of the content and its displacement from the box center."""

    x: float
    y: float
    offset_x: float
    offset_y: float


@dataclass(frozen=True, slots=True)
class MeasurementResult:
    """Everything measured about a single decoded image."""

    width: int
    height: int
    content_box: BoundingBox | None = None
    visual_center: VisualCenter | None = None
    pixel_density: float | None = None


@dataclass(frozen=True, slots=True)
class NormalizedLogo:
    """Display-ready record for one logo, produced once per input image."""

    src: str
    alt: str
    original_width: int
    original_height: int
    normalized_width: float
    normalized_height: float
    aspect_ratio: float
    content_box: BoundingBox | None = None
    pixel_density: float | None = None
    visual_center: VisualCenter | None = None
    cropped_src: str | None = None

    @property
    def display_src(self) -> str:
        """Return the cropped image when one was produced, else the original."""
        return self.cropped_src or self.src


@dataclass(frozen=True, slots=True)
class Translation:
    """Render-time offset in display pixels."""

    x: float
    y: float

    def css(self) -> str:
        """Return the translation as a CSS ``transform`` value."""
        return f"translate({self.x:.1f}px, {self.y:.1f}px)"
