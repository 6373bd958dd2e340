"""Command-line interface for the logo_soup project."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from .config import (
    ALIGNMENT_MODES,
    DEFAULT_ALIGN_BY,
    DEFAULT_BASE_SIZE,
    DEFAULT_CONTRAST_THRESHOLD,
    DEFAULT_DENSITY_FACTOR,
    DEFAULT_ON_ERROR,
    DEFAULT_SCALE_FACTOR,
    ERROR_POLICIES,
    NormalizeOptions,
)
from .imaging.decode import LoadFailure
from .io.models import NormalizedLogo
from .io.outputs import logos_to_frame, logos_to_json
from .pipeline import iter_normalized


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for logo normalisation."""
    parser = argparse.ArgumentParser(
        description="Measure logo images and print display sizes that balance them."
    )
    parser.add_argument(
        "sources",
        nargs="*",
        help="Image paths or data URIs to normalise, in display order.",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Path to a text file containing image sources, one per line.",
    )
    parser.add_argument("--base-size", type=float, default=DEFAULT_BASE_SIZE)
    parser.add_argument(
        "--scale-factor",
        type=float,
        default=DEFAULT_SCALE_FACTOR,
        help="0 gives equal widths, 1 equal heights (default %(default)s).",
    )
    parser.add_argument(
        "--contrast-threshold", type=int, default=DEFAULT_CONTRAST_THRESHOLD
    )
    parser.add_argument(
        "--no-density",
        action="store_true",
        help="Do not measure or compensate for pixel density.",
    )
    parser.add_argument("--density-factor", type=float, default=DEFAULT_DENSITY_FACTOR)
    parser.add_argument(
        "--crop",
        action="store_true",
        help="Include a PNG data URI cropped to each logo's content.",
    )
    parser.add_argument("--align-by", choices=ALIGNMENT_MODES, default=DEFAULT_ALIGN_BY)
    parser.add_argument(
        "--on-error",
        choices=ERROR_POLICIES,
        default=DEFAULT_ON_ERROR,
        help="Abort the batch on the first unreadable image, or skip it.",
    )
    parser.add_argument("--format", choices=("json", "table"), default="json")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(list(argv) if argv is not None else None)


def read_input(path: Path) -> list[str]:
    """Read newline separated entries from *path* and return non-empty lines."""
    if not path.exists():
        raise FileNotFoundError(f"Input file does not exist: {path}")
    lines = [line.strip() for line in path.read_text(encoding="utf-8-sig").splitlines()]
    return [line for line in lines if line]


def options_from_args(args: argparse.Namespace) -> NormalizeOptions:
    return NormalizeOptions(
        base_size=args.base_size,
        scale_factor=args.scale_factor,
        contrast_threshold=args.contrast_threshold,
        density_aware=not args.no_density,
        density_factor=args.density_factor,
        crop_to_content=args.crop,
        align_by=args.align_by,
        on_error=args.on_error,
    )


def _normalize_all(sources: list[str], options: NormalizeOptions) -> list[NormalizedLogo]:
    progress = tqdm(
        iter_normalized(sources, options),
        total=len(sources),
        desc="Normalizing logos",
        unit="logo",
        leave=False,
    )
    return list(progress)


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sources = list(args.sources)
    if args.input:
        sources.extend(read_input(Path(args.input)))
    if not sources:
        print("[error] no image sources given", file=sys.stderr)
        return 2

    options = options_from_args(args)
    try:
        logos = _normalize_all(sources, options)
    except LoadFailure as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    skipped = len(sources) - len(logos)
    if skipped:
        print(
            f"[skip] {skipped} of {len(sources)} logos could not be loaded",
            file=sys.stderr,
        )

    if args.format == "table":
        print(logos_to_frame(logos, options.align_by).to_string(index=False))
    else:
        print(logos_to_json(logos, options.align_by))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
