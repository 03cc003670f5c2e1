from __future__ import annotations

import io

import pytest
from PIL import Image

from cdi_platform.ai.images import (
    ContentBox,
    ImageProcessingError,
    content_box,
    crop_to_original_aspect_ratio,
    decode_data_url,
    image_dimensions,
    mark_image,
    resize_to_square,
    to_data_url,
)


def _png(width: int, height: int, color: str = "white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


class TestContentBox:
    def test_landscape_spans_full_width(self) -> None:
        assert content_box(200, 100, 100) == ContentBox(x=0.0, y=25.0, width=100.0, height=50.0)

    def test_portrait_spans_full_height(self) -> None:
        assert content_box(100, 200, 100) == ContentBox(x=25.0, y=0.0, width=50.0, height=100.0)

    def test_square_fills_target(self) -> None:
        assert content_box(300, 300, 100) == ContentBox(x=0.0, y=0.0, width=100.0, height=100.0)

    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 5)])
    def test_rejects_non_positive_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ImageProcessingError):
            content_box(width, height, 100)


class TestResizeAndCrop:
    def test_resize_to_square_letterboxes(self) -> None:
        out = resize_to_square(_png(400, 200), target_dimension=100)

        img = Image.open(io.BytesIO(out))
        assert img.format == "JPEG"
        assert img.size == (100, 100)
        # padding above the content stays black, the centre carries the photo
        assert sum(img.getpixel((50, 5))) < 60
        assert sum(img.getpixel((50, 50))) > 700

    def test_crop_restores_aspect_ratio(self) -> None:
        square = resize_to_square(_png(400, 200), target_dimension=100)

        cropped = crop_to_original_aspect_ratio(square, 400, 200, target_dimension=100)

        assert image_dimensions(cropped) == (100, 50)

    def test_crop_rescales_non_square_input(self) -> None:
        cropped = crop_to_original_aspect_ratio(_png(50, 50), 100, 200, target_dimension=100)

        assert image_dimensions(cropped) == (50, 100)

    def test_invalid_bytes_raise(self) -> None:
        with pytest.raises(ImageProcessingError):
            resize_to_square(b"not an image")


class TestMarkImage:
    def test_draws_red_dot_at_translated_position(self) -> None:
        square = resize_to_square(_png(400, 200, "blue"), target_dimension=200)

        marked = mark_image(square, 50, 50, 400, 200)

        r, g, b = Image.open(io.BytesIO(marked)).getpixel((100, 100))
        assert r > 200 and g < 80 and b < 80


class TestDataUrls:
    def test_round_trip(self) -> None:
        raw = _png(4, 4)

        mime, decoded = decode_data_url(to_data_url(raw, "image/png"))

        assert mime == "image/png"
        assert decoded == raw

    def test_plain_payload(self) -> None:
        assert decode_data_url("data:text/plain,hello") == ("text/plain", b"hello")

    @pytest.mark.parametrize("value", ["http://example.com/a.png", "data:image/png;base64,@@@"])
    def test_invalid_urls_raise(self, value: str) -> None:
        with pytest.raises(ImageProcessingError):
            decode_data_url(value)
