"""Image normalisation helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 300


class ImageDecodeError(ValueError):
    """Raised when uploaded bytes cannot be decoded as an image."""


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """Row-major RGBA bytes of a decoded image."""

    width: int
    height: int
    pixels: bytes


def fit_within(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    """Return a size no larger than ``max_dimension`` on either side, keeping aspect."""

    longest = max(width, height)
    if longest <= max_dimension:
        return width, height

    return (
        max(1, width * max_dimension // longest),
        max(1, height * max_dimension // longest),
    )


class ImageNormalizer:
    """Decodes uploads into RGBA buffers capped at the working resolution."""

    def __init__(self, max_dimension: int = DEFAULT_MAX_DIMENSION) -> None:
        self._max_dimension = max_dimension

    def normalize(self, image_bytes: bytes) -> PixelBuffer:
        """Decode ``image_bytes`` and return its downscaled RGBA pixels."""

        try:
            with Image.open(BytesIO(image_bytes)) as img:
                img = ImageOps.exif_transpose(img)
                img = img.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageDecodeError("Failed to load image.") from exc

        size = fit_within(img.width, img.height, self._max_dimension)
        if size != img.size:
            logger.debug("Downscaling image from %dx%d to %dx%d", *img.size, *size)
            img = img.resize(size, Image.Resampling.LANCZOS)

        return PixelBuffer(width=img.width, height=img.height, pixels=img.tobytes())
