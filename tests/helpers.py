"""Builders for raw RGBA buffers and encoded test images."""

from __future__ import annotations

from io import BytesIO
from typing import Iterable

from PIL import Image

Pixel = tuple[int, int, int, int]


def pack_pixels(pixels: Iterable[Pixel]) -> bytes:
    return bytes(channel for pixel in pixels for channel in pixel)


def solid_buffer(pixel: Pixel, width: int, height: int) -> bytes:
    return pack_pixels([pixel] * (width * height))


def encode_png(pixel: Pixel, width: int, height: int) -> bytes:
    image = Image.new("RGBA", (width, height), pixel)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
