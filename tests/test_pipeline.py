"""Tests for batch orchestration."""

from __future__ import annotations

import logging

import pytest

from logo_soup.config import NormalizeOptions
from logo_soup.imaging.decode import LoadFailure
from logo_soup.io.models import BoundingBox, LogoSource
from logo_soup.measure.pixels import PixelBuffer
from logo_soup.pipeline import (
    BatchCancelled,
    CancellationToken,
    iter_normalized,
    process_logos,
)

from conftest import BLACK

RED = (255, 0, 0, 255)
NO_DENSITY = NormalizeOptions(density_aware=False)


class FakeLoader:
    """In-memory loader recording every source it is asked for."""

    def __init__(self, images: dict[str, PixelBuffer]) -> None:
        self.images = images
        self.calls: list[str] = []

    def __call__(self, src: str) -> PixelBuffer:
        self.calls.append(src)
        if src not in self.images:
            raise LoadFailure(src)
        return self.images[src]


@pytest.fixture
def loader(make_pixels) -> FakeLoader:
    return FakeLoader(
        {
            "wide.png": make_pixels(200, 100, fill=RED),
            "tall.png": make_pixels(100, 200, fill=RED),
            "padded.png": make_pixels(
                40, 40, shapes=[(BoundingBox(10, 15, 20, 10), BLACK)]
            ),
            "blank.png": make_pixels(50, 50),
        }
    )


def test_empty_batch() -> None:
    assert process_logos([]) == []


def test_wide_and_tall_logos_are_balanced(loader) -> None:
    wide, tall = process_logos(["wide.png", "tall.png"], NO_DENSITY, loader=loader)
    assert wide.aspect_ratio == 2.0
    assert tall.aspect_ratio == 0.5
    assert wide.normalized_width > 48 > tall.normalized_width
    assert (wide.normalized_width, wide.normalized_height) == (68, 34)
    assert (tall.normalized_width, tall.normalized_height) == (34, 68)
    assert wide.pixel_density is None


def test_results_keep_input_order_and_identity(loader) -> None:
    results = process_logos(
        [LogoSource("tall.png", "Tall"), {"src": "wide.png", "alt": "Wide"}, "padded.png"],
        NO_DENSITY,
        loader=loader,
    )
    assert [(logo.src, logo.alt) for logo in results] == [
        ("tall.png", "Tall"),
        ("wide.png", "Wide"),
        ("padded.png", ""),
    ]
    assert loader.calls == ["tall.png", "wide.png", "padded.png"]


def test_content_box_drives_sizing(loader) -> None:
    (logo,) = process_logos(["padded.png"], NO_DENSITY, loader=loader)
    assert logo.content_box == BoundingBox(10, 15, 20, 10)
    assert (logo.original_width, logo.original_height) == (40, 40)
    assert (logo.normalized_width, logo.normalized_height) == (68, 34)
    assert logo.visual_center.offset_x == pytest.approx(0.0)
    assert logo.visual_center.offset_y == pytest.approx(0.0)


def test_density_aware_defaults(loader) -> None:
    (logo,) = process_logos(["wide.png"], loader=loader)
    assert logo.pixel_density == pytest.approx(1.0)
    assert (logo.normalized_width, logo.normalized_height) == (52, 26)


def test_zero_density_factor_matches_density_unaware(loader) -> None:
    sources = ["wide.png", "tall.png", "padded.png"]
    weighted = process_logos(sources, NormalizeOptions(density_factor=0.0), loader=loader)
    plain = process_logos(sources, NO_DENSITY, loader=loader)
    assert [(l.normalized_width, l.normalized_height) for l in weighted] == [
        (l.normalized_width, l.normalized_height) for l in plain
    ]


def test_blank_image_degrades_gracefully(loader) -> None:
    (logo,) = process_logos(["blank.png"], loader=loader)
    assert logo.content_box == BoundingBox(0, 0, 50, 50)
    assert (logo.visual_center.offset_x, logo.visual_center.offset_y) == (0.0, 0.0)
    assert logo.pixel_density == 0.0


def test_pipeline_is_idempotent(loader) -> None:
    options = NormalizeOptions(crop_to_content=True)
    first = process_logos(["padded.png", "wide.png"], options, loader=loader)
    second = process_logos(["padded.png", "wide.png"], options, loader=loader)
    assert first == second


def test_crop_to_content(loader) -> None:
    (logo,) = process_logos(
        ["padded.png"], NormalizeOptions(crop_to_content=True), loader=loader
    )
    assert logo.cropped_src.startswith("data:image/png;base64,")
    assert logo.display_src == logo.cropped_src


def test_abort_policy_stops_at_first_failure(loader) -> None:
    with pytest.raises(LoadFailure) as excinfo:
        process_logos(["wide.png", "missing.png", "tall.png"], loader=loader)
    assert excinfo.value.src == "missing.png"
    assert loader.calls == ["wide.png", "missing.png"]


def test_skip_policy_omits_failures(loader, caplog) -> None:
    options = NormalizeOptions(on_error="skip")
    with caplog.at_level(logging.WARNING, logger="logo_soup.pipeline"):
        results = process_logos(["wide.png", "missing.png", "tall.png"], options, loader=loader)
    assert [logo.src for logo in results] == ["wide.png", "tall.png"]
    assert "missing.png" in caplog.text


def test_cancelled_token_prevents_any_work(loader) -> None:
    token = CancellationToken()
    token.cancel()
    with pytest.raises(BatchCancelled):
        process_logos(["wide.png"], loader=loader, token=token)
    assert loader.calls == []


def test_cancellation_mid_batch_discards_results(loader) -> None:
    token = CancellationToken()

    def cancelling_loader(src: str) -> PixelBuffer:
        if src == "tall.png":
            token.cancel()
        return loader(src)

    with pytest.raises(BatchCancelled):
        process_logos(["wide.png", "tall.png"], loader=cancelling_loader, token=token)


def test_iter_normalized_is_lazy(loader) -> None:
    results = iter_normalized(["wide.png", "tall.png"], NO_DENSITY, loader=loader)
    assert loader.calls == []
    assert next(results).src == "wide.png"
    assert loader.calls == ["wide.png"]


def test_default_loader_reads_files(write_png) -> None:
    path = write_png("file.png", 30, 30, shapes=[(BoundingBox(5, 5, 10, 20), BLACK)])
    (logo,) = process_logos([str(path)], NO_DENSITY)
    assert logo.content_box == BoundingBox(5, 5, 10, 20)
    assert logo.aspect_ratio == 0.5


def test_options_validation() -> None:
    with pytest.raises(ValueError, match="alignment mode"):
        NormalizeOptions(align_by="middle")
    with pytest.raises(ValueError, match="on_error"):
        NormalizeOptions(on_error="retry")
    with pytest.raises(ValueError, match="background"):
        NormalizeOptions(background=(0, 0))  # type: ignore[arg-type]
