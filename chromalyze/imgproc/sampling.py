"""Pixel sampling over decoded RGBA buffers."""

from __future__ import annotations

from typing import Iterator, Sequence

# Every 4th pixel: 4 pixels * 4 bytes.
SAMPLE_STRIDE = 16
ALPHA_CUTOFF = 64
BYTES_PER_PIXEL = 4

Sample = tuple[int, int, int]


def iter_samples(
    pixels: Sequence[int] | bytes | None,
    width: int,
    height: int,
    stride: int = SAMPLE_STRIDE,
) -> Iterator[Sample]:
    """Yield ``(r, g, b)`` for every ``stride``-th byte offset of an RGBA buffer.

    Pixels with alpha below ``ALPHA_CUTOFF`` are skipped. The buffer is read
    in scan order and never modified; a missing buffer behaves as an empty one.
    """

    if not pixels or width <= 0 or height <= 0:
        return

    end = min(len(pixels), width * height * BYTES_PER_PIXEL)
    for offset in range(0, end - BYTES_PER_PIXEL + 1, max(stride, 1)):
        if pixels[offset + 3] < ALPHA_CUTOFF:
            continue
        yield pixels[offset], pixels[offset + 1], pixels[offset + 2]
