"""Default image loader: turns a source descriptor into decoded RGBA pixels."""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, unquote_to_bytes, urlparse

from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from ..measure.pixels import PixelBuffer

try:  # pragma: no cover - optional dependency
    import cairosvg  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    cairosvg = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_SVG_MIME_TYPES = {"image/svg+xml", "image/svg", "text/svg"}
_REMOTE_SCHEMES = {"http", "https", "ftp"}

ImageLoader = Callable[[str], PixelBuffer]


class LoadFailure(Exception):
    """Raised when an image source cannot be read or decoded."""

    def __init__(self, src: str, reason: str | None = None) -> None:
        message = f"Failed to load image: {_describe(src)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.src = src
        self.reason = reason


def load_pixels(src: str) -> PixelBuffer:
    """Load *src* (a ``data:`` URI, local path or ``file://`` URI) into pixels."""
    if not isinstance(src, str) or not src.strip():
        raise LoadFailure(str(src), "empty source")

    value = src.strip()
    if value.startswith("data:"):
        payload, mime_hint = _decode_data_uri(value)
        if payload is None:
            raise LoadFailure(src, "malformed data URI")
        return decode_image(payload, mime_hint, src=src)

    parsed = urlparse(value)
    if parsed.scheme.lower() in _REMOTE_SCHEMES:
        raise LoadFailure(src, "remote sources need a custom loader")

    path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(value)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise LoadFailure(src, exc.strerror or str(exc)) from exc
    mime_hint = "image/svg+xml" if path.suffix.lower() == ".svg" else None
    return decode_image(payload, mime_hint, src=src)


def decode_image(
    image_bytes: bytes, mime_hint: str | None = None, src: str = "<bytes>"
) -> PixelBuffer:
    """Decode *image_bytes* into RGBA pixels, rasterizing SVG when possible."""
    if not image_bytes:
        raise LoadFailure(src, "empty image payload")

    data = image_bytes
    mime = (mime_hint or "").lower()
    if mime in _SVG_MIME_TYPES or _looks_like_svg(image_bytes):
        if cairosvg is None:
            raise LoadFailure(src, "SVG support requires cairosvg")
        try:
            data = cairosvg.svg2png(bytestring=image_bytes)  # type: ignore[attr-defined]
        except Exception as exc:  # noqa: BLE001 - cairosvg raises assorted errors
            raise LoadFailure(src, "invalid SVG") from exc

    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            pixels = PixelBuffer.from_image(img)
    except (UnidentifiedImageError, DecompressionBombError, OSError) as exc:
        raise LoadFailure(src, "undecodable image data") from exc

    logger.debug("Decoded %s to %dx%d pixels", _describe(src), pixels.width, pixels.height)
    return pixels


def _decode_data_uri(uri: str) -> tuple[bytes | None, str | None]:
    try:
        header, data = uri.split(",", 1)
    except ValueError:
        return None, None
    mime = header[len("data:") :].split(";", 1)[0] or None
    if ";base64" in header:
        try:
            return base64.b64decode(data, validate=True), mime
        except (binascii.Error, ValueError):
            return None, mime
    return unquote_to_bytes(data), mime


def _looks_like_svg(image_bytes: bytes) -> bool:
    snippet = image_bytes[:1024].lstrip().lower()
    return snippet.startswith(b"<svg") or (
        snippet.startswith(b"<?xml") and b"<svg" in snippet
    )


def _describe(src: str) -> str:
    if src.startswith("data:"):
        return src[:40] + "..." if len(src) > 40 else src
    return src
