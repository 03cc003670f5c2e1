"""Image preparation helpers for multimodal model calls.

Photos are letterboxed into a fixed black square before upload so the model
always sees the same input size, then model output can be cropped back to the
original aspect ratio. Marker coordinates are given as percentages of the
original photo and translated into the padded square.
"""

from __future__ import annotations

import base64
import io
import re
from dataclasses import dataclass
from typing import Tuple

from PIL import Image, ImageDraw, ImageOps

DEFAULT_TARGET_DIMENSION = 1024
JPEG_QUALITY = 95

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]+)(?P<b64>;base64)?,(?P<data>.*)$", re.S)


class ImageProcessingError(ValueError):
    """Raised when image bytes or a data URL cannot be decoded."""


@dataclass(frozen=True)
class ContentBox:
    """Placement of the original photo inside the padded square."""

    x: float
    y: float
    width: float
    height: float


def _open(data: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except Exception as e:
        raise ImageProcessingError(f"Image load error: {e}") from e
    return ImageOps.exif_transpose(img).convert("RGB")


def _to_jpeg(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=JPEG_QUALITY)
    return buf.getvalue()


def image_dimensions(data: bytes) -> Tuple[int, int]:
    """Intrinsic (width, height) of an encoded image, after EXIF rotation."""
    return _open(data).size


def content_box(original_width: int, original_height: int, target_dimension: int) -> ContentBox:
    """Where a photo of the given size lands when fitted into a square.

    Landscape photos span the full width, portrait and square photos the full
    height; the content is centred.
    """
    if original_width <= 0 or original_height <= 0:
        raise ImageProcessingError("Image dimensions must be positive")
    aspect_ratio = original_width / original_height
    if aspect_ratio > 1:
        width, height = float(target_dimension), target_dimension / aspect_ratio
    else:
        width, height = target_dimension * aspect_ratio, float(target_dimension)
    return ContentBox(
        x=(target_dimension - width) / 2,
        y=(target_dimension - height) / 2,
        width=width,
        height=height,
    )


def resize_to_square(data: bytes, target_dimension: int = DEFAULT_TARGET_DIMENSION) -> bytes:
    """Fit a photo inside a black square without cropping.

    Args:
        data: Encoded source image
        target_dimension: Side of the output square in pixels

    Returns:
        JPEG bytes of the padded square
    """
    img = _open(data)
    box = content_box(img.width, img.height, target_dimension)
    canvas = Image.new("RGB", (target_dimension, target_dimension), "black")
    resized = img.resize((max(1, round(box.width)), max(1, round(box.height))), Image.Resampling.LANCZOS)
    canvas.paste(resized, (round(box.x), round(box.y)))
    return _to_jpeg(canvas)


def crop_to_original_aspect_ratio(
    data: bytes, original_width: int, original_height: int, target_dimension: int = DEFAULT_TARGET_DIMENSION
) -> bytes:
    """Remove the letterbox padding from a square image.

    Args:
        data: Encoded square image, typically model output
        original_width: Width of the photo before padding
        original_height: Height of the photo before padding
        target_dimension: Side of the square the photo was padded into

    Returns:
        JPEG bytes of the content area
    """
    img = _open(data)
    if img.size != (target_dimension, target_dimension):
        img = img.resize((target_dimension, target_dimension), Image.Resampling.LANCZOS)
    box = content_box(original_width, original_height, target_dimension)
    cropped = img.crop((round(box.x), round(box.y), round(box.x + box.width), round(box.y + box.height)))
    return _to_jpeg(cropped)


def mark_image(data: bytes, x_percent: float, y_percent: float, original_width: int, original_height: int) -> bytes:
    """Draw a red, white-outlined dot on a padded square image.

    Args:
        data: Encoded padded square image
        x_percent: Horizontal position, 0-100 across the original photo
        y_percent: Vertical position, 0-100 down the original photo
        original_width: Width of the photo before padding
        original_height: Height of the photo before padding

    Returns:
        JPEG bytes with the marker drawn
    """
    img = _open(data)
    box = content_box(original_width, original_height, img.width)
    cx = box.x + (x_percent / 100) * box.width
    cy = box.y + (y_percent / 100) * box.height
    radius = max(5.0, min(img.width, img.height) * 0.015)
    outline = max(1, round(radius * 0.2))

    draw = ImageDraw.Draw(img)
    draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill="red", outline="white", width=outline)
    return _to_jpeg(img)


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Split a ``data:`` URL into (mime type, raw bytes)."""
    match = _DATA_URL_RE.match(data_url.strip())
    if not match:
        raise ImageProcessingError("Invalid data URL")
    payload = match.group("data")
    try:
        raw = base64.b64decode(payload, validate=True) if match.group("b64") else payload.encode()
    except ValueError as e:
        raise ImageProcessingError(f"Invalid base64 payload: {e}") from e
    return match.group("mime"), raw


def to_data_url(data: bytes, mime_type: str = "image/jpeg") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('utf-8')}"
