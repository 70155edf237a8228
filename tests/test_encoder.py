from __future__ import annotations

import asyncio
import base64
import io

import pytest
from PIL import Image

from plantid.errors import EncodingError, ErrorKind
from scanner.capture import RawImage
from scanner.encoder import ImageEncoder


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(34, 139, 34)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_encode_produces_data_url_with_detected_media_type() -> None:
    data = _png_bytes()
    # Misleading extension: the detected format wins.
    image = RawImage.from_bytes(data, filename="leaf.jpg")

    encoded = asyncio.run(ImageEncoder().encode(image))

    assert encoded.media_type == "image/png"
    prefix, payload = encoded.value.split(",", 1)
    assert prefix == "data:image/png;base64"
    assert base64.b64decode(payload) == data


def test_encode_is_deterministic() -> None:
    image = RawImage.from_bytes(_png_bytes(), filename="leaf.png")
    encoder = ImageEncoder()

    first = asyncio.run(encoder.encode(image))
    second = asyncio.run(encoder.encode(RawImage.from_bytes(image.data, filename="other.png")))

    assert first == second


def test_unreadable_payload_raises_encoding_error() -> None:
    image = RawImage.from_bytes(b"definitely not an image", filename="notes.txt")

    with pytest.raises(EncodingError) as excinfo:
        asyncio.run(ImageEncoder().encode(image))

    assert excinfo.value.kind == ErrorKind.ENCODING_ERROR


def test_zero_byte_payload_is_passed_through() -> None:
    image = RawImage.from_bytes(b"", filename="empty.jpg")

    encoded = asyncio.run(ImageEncoder().encode(image))

    assert encoded.value == "data:image/jpeg;base64,"
    assert encoded.media_type == "image/jpeg"
