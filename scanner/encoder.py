from __future__ import annotations

import asyncio
import base64
import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from plantid.errors import EncodingError

from .capture import RawImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedImage:
    value: str
    media_type: str


class ImageEncoder:
    """Turn a RawImage into the ``data:`` URL string the service accepts."""

    async def encode(self, image: RawImage) -> EncodedImage:
        return await asyncio.to_thread(self.encode_sync, image)

    def encode_sync(self, image: RawImage) -> EncodedImage:
        media_type = image.media_type
        if image.data:
            media_type = self._detect_media_type(image)
        encoded = base64.b64encode(image.data).decode("ascii")
        logger.debug("Encoded %s media_type=%s bytes=%d", image.filename, media_type, len(image.data))
        return EncodedImage(value=f"data:{media_type};base64,{encoded}", media_type=media_type)

    def _detect_media_type(self, image: RawImage) -> str:
        try:
            with Image.open(io.BytesIO(image.data)) as probe:
                image_format = probe.format
                probe.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise EncodingError(f"Unable to read image {image.filename!r}: {exc}") from exc
        return Image.MIME.get(image_format or "", image.media_type)


__all__ = ["EncodedImage", "ImageEncoder"]
