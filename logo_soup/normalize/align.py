"""Render-time translation that lines logos up on their visual centres."""

from __future__ import annotations

from ..config import DEFAULT_ALIGN_BY, validate_alignment_mode
from ..io.models import NormalizedLogo, Translation

# Offsets at or below this many display pixels are not worth a transform.
_MIN_SHIFT = 0.5

_X_MODES = frozenset({"visual-center", "visual-center-x"})
_Y_MODES = frozenset({"visual-center", "visual-center-y"})


def visual_center_transform(
    logo: NormalizedLogo, align_by: str = DEFAULT_ALIGN_BY
) -> Translation | None:
    """Return the shift that moves the visual centre onto the box centre.

    ``None`` means the logo should be drawn as-is: alignment by bounds, no
    measured visual centre, or a shift too small to see.
    """
    validate_alignment_mode(align_by)
    center = logo.visual_center
    if align_by == "bounds" or center is None:
        return None

    box = logo.content_box
    scale_x = _scale(logo.normalized_width, box.width if box else 0, logo.original_width)
    scale_y = _scale(
        logo.normalized_height, box.height if box else 0, logo.original_height
    )

    offset_x = -center.offset_x * scale_x if align_by in _X_MODES else 0.0
    offset_y = -center.offset_y * scale_y if align_by in _Y_MODES else 0.0

    if abs(offset_x) > _MIN_SHIFT or abs(offset_y) > _MIN_SHIFT:
        # Adding 0.0 folds negative zero into zero.
        return Translation(offset_x + 0.0, offset_y + 0.0)
    return None


def _scale(display: float, content: int, original: int) -> float:
    source = content or original
    if not source:
        return 0.0
    return display / source
