"""Defaults and option handling for the logo normalization pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from .io.models import Background

DEFAULT_BASE_SIZE = 48
DEFAULT_SCALE_FACTOR = 0.5
DEFAULT_CONTRAST_THRESHOLD = 10
DEFAULT_DENSITY_FACTOR = 0.5
DEFAULT_ALIGN_BY = "bounds"
DEFAULT_ON_ERROR = "abort"

# Background is assumed, never sampled from the image.
DEFAULT_BACKGROUND: Background = (255, 255, 255)

# Density of a "typical" logo; marks at this density are left unscaled.
REFERENCE_DENSITY = 0.35
NEUTRAL_DENSITY = 0.5
DENSITY_SCALE_MIN = 0.5
DENSITY_SCALE_MAX = 2.0

ALIGNMENT_MODES = ("bounds", "visual-center", "visual-center-x", "visual-center-y")
ERROR_POLICIES = ("abort", "skip")


@dataclass(frozen=True, slots=True)
class NormalizeOptions:
    """Options recognised by :func:`logo_soup.pipeline.process_logos`."""

    base_size: float = DEFAULT_BASE_SIZE
    scale_factor: float = DEFAULT_SCALE_FACTOR
    contrast_threshold: int = DEFAULT_CONTRAST_THRESHOLD
    density_aware: bool = True
    density_factor: float = DEFAULT_DENSITY_FACTOR
    crop_to_content: bool = False
    align_by: str = DEFAULT_ALIGN_BY
    background: Background = DEFAULT_BACKGROUND
    on_error: str = DEFAULT_ON_ERROR

    def __post_init__(self) -> None:
        validate_alignment_mode(self.align_by)
        if self.on_error not in ERROR_POLICIES:
            raise ValueError(
                f"on_error must be one of {', '.join(ERROR_POLICIES)}; got {self.on_error!r}"
            )
        if len(self.background) != 3:
            raise ValueError("background must be an (r, g, b) triple")

    @property
    def effective_density_factor(self) -> float:
        """Density weight actually applied when sizing."""
        return self.density_factor if self.density_aware else 0.0


def validate_alignment_mode(mode: str) -> str:
    """Return *mode* when it names a supported alignment, else raise ``ValueError``."""
    if mode not in ALIGNMENT_MODES:
        raise ValueError(
            f"Unknown alignment mode {mode!r}; expected one of {', '.join(ALIGNMENT_MODES)}"
        )
    return mode
