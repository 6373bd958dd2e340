"""Batch orchestration: load, measure, size and optionally crop each logo."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Iterator, Mapping, Sequence, Union

from .config import NormalizeOptions
from .imaging.crop import crop_to_data_url
from .imaging.decode import ImageLoader, LoadFailure, load_pixels
from .io.models import LogoSource, NormalizedLogo
from .measure.measurement import measure_with_content_detection
from .measure.pixels import PixelBuffer
from .normalize.sizing import create_normalized_logo, normalize_source

logger = logging.getLogger(__name__)

LogoInput = Union[str, LogoSource, Mapping[str, Any]]


class BatchCancelled(Exception):
    """Raised when a batch is abandoned before it completes."""


class CancellationToken:
    """Thread-safe flag shared between a batch and whoever may abandon it."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise BatchCancelled("Logo batch was cancelled")


def normalize_pixels(
    source: LogoSource, pixels: PixelBuffer, options: NormalizeOptions
) -> NormalizedLogo:
    """Run the measurement and sizing stages on an already decoded image."""
    measurement = measure_with_content_detection(
        pixels,
        options.contrast_threshold,
        include_density=options.density_aware,
        background=options.background,
    )
    logo = create_normalized_logo(
        source,
        measurement,
        options.base_size,
        options.scale_factor,
        options.effective_density_factor,
    )
    if options.crop_to_content and measurement.content_box is not None:
        cropped = crop_to_data_url(pixels, measurement.content_box, source.src)
        logo = replace(logo, cropped_src=cropped)
    return logo


def iter_normalized(
    logos: Sequence[LogoInput],
    options: NormalizeOptions | None = None,
    loader: ImageLoader | None = None,
    token: CancellationToken | None = None,
) -> Iterator[NormalizedLogo]:
    """Yield one normalised record per input logo, strictly in input order.

    With ``on_error="abort"`` the first :class:`LoadFailure` propagates; with
    ``"skip"`` the failed logo is logged and left out.
    """
    options = options or NormalizeOptions()
    load = loader or load_pixels
    sources = [normalize_source(item) for item in logos]

    for source in sources:
        if token is not None:
            token.raise_if_cancelled()
        try:
            pixels = load(source.src)
        except LoadFailure as exc:
            if options.on_error == "skip":
                logger.warning("Skipping logo %s: %s", source.src[:80], exc)
                continue
            raise
        yield normalize_pixels(source, pixels, options)


def process_logos(
    logos: Sequence[LogoInput],
    options: NormalizeOptions | None = None,
    loader: ImageLoader | None = None,
    token: CancellationToken | None = None,
) -> list[NormalizedLogo]:
    """Normalise every logo in *logos* and return the records in input order.

    A cancelled batch raises :class:`BatchCancelled` instead of returning
    partial results.
    """
    if not logos:
        return []
    results = list(iter_normalized(logos, options, loader=loader, token=token))
    if token is not None:
        token.raise_if_cancelled()
    return results
