"""Rendering helpers for presenting normalised logos."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Sequence

import pandas as pd

from ..config import DEFAULT_ALIGN_BY
from ..normalize.align import visual_center_transform
from .models import NormalizedLogo

_TABLE_COLUMNS = (
    "src",
    "original_width",
    "original_height",
    "normalized_width",
    "normalized_height",
    "aspect_ratio",
    "pixel_density",
    "transform",
)


def logo_to_dict(logo: NormalizedLogo, align_by: str = DEFAULT_ALIGN_BY) -> dict[str, Any]:
    """Return *logo* as plain data including the CSS transform for *align_by*."""
    payload = asdict(logo)
    transform = visual_center_transform(logo, align_by)
    payload["transform"] = transform.css() if transform else None
    return payload


def logos_to_json(
    logos: Sequence[NormalizedLogo], align_by: str = DEFAULT_ALIGN_BY, indent: int = 2
) -> str:
    """Serialise *logos* to a JSON array."""
    return json.dumps([logo_to_dict(logo, align_by) for logo in logos], indent=indent)


def logos_to_frame(
    logos: Sequence[NormalizedLogo], align_by: str = DEFAULT_ALIGN_BY
) -> pd.DataFrame:
    """Return a one-row-per-logo table of the headline sizing figures."""
    rows = []
    for logo in logos:
        payload = logo_to_dict(logo, align_by)
        rows.append({column: payload[column] for column in _TABLE_COLUMNS})
    return pd.DataFrame(rows, columns=list(_TABLE_COLUMNS))
