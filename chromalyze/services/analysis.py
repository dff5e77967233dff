"""Colour analysis pipeline that coordinates decoding and extraction."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Sequence

from chromalyze.config.settings import Settings, get_settings
from chromalyze.imgproc.color_extract import ColorExtractor, ColorResult
from chromalyze.imgproc.normalize import ImageDecodeError, ImageNormalizer, PixelBuffer
from chromalyze.metrics.prometheus_exporter import (
    color_extraction_failures_total,
    color_extraction_samples,
    color_extraction_total,
)

logger = logging.getLogger(__name__)

# Rounded totals at or above this leave no "other" share.
FULL_COVERAGE = 99.9


class UploadTooLargeError(RuntimeError):
    """Raised when an upload exceeds the configured size limit."""


@dataclass(slots=True)
class ColorAnalysis:
    """Dominant colours of one image together with its working size."""

    width: int = 0
    height: int = 0
    colors: list[ColorResult] = field(default_factory=list)
    other_percentage: float = 0.0


def remainder_percentage(colors: Sequence[ColorResult]) -> float:
    """Return the share not covered by ``colors``, or 0 when it is negligible."""

    if not colors:
        return 0.0
    total = sum(color.percentage for color in colors)
    if total >= FULL_COVERAGE:
        return 0.0
    return round(100 - total, 2)


class ColorAnalysisService:
    """Facade over image decoding and the colour extraction engine."""

    def __init__(
        self,
        settings: Settings | None = None,
        normalizer: ImageNormalizer | None = None,
        extractor: ColorExtractor | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._normalizer = normalizer or ImageNormalizer(self._settings.max_dimension)
        self._extractor = extractor or ColorExtractor()

    def check_upload_size(self, size: int) -> None:
        """Raise ``UploadTooLargeError`` when ``size`` bytes exceed the upload limit."""

        if size > self._settings.max_upload_bytes:
            color_extraction_failures_total.labels(reason="too_large").inc()
            raise UploadTooLargeError(
                f"Upload exceeds the {self._settings.max_upload_bytes} byte limit."
            )

    async def analyse(self, image_bytes: bytes, color_count: int | None = None) -> ColorAnalysis:
        """Decode ``image_bytes`` and extract its dominant colours off the event loop."""

        self.check_upload_size(len(image_bytes))
        count = self._settings.default_color_count if color_count is None else color_count
        return await asyncio.to_thread(self.analyse_bytes, image_bytes, count)

    def analyse_bytes(self, image_bytes: bytes, color_count: int) -> ColorAnalysis:
        """Synchronous variant of :meth:`analyse` without the size check."""

        if not image_bytes:
            return self.analyse_buffer(None, color_count)

        try:
            buffer = self._normalizer.normalize(image_bytes)
        except ImageDecodeError as exc:
            color_extraction_failures_total.labels(reason="decode").inc()
            logger.warning("Could not decode uploaded image: %s", exc.__cause__ or exc)
            raise

        return self.analyse_buffer(buffer, color_count)

    def analyse_buffer(self, buffer: PixelBuffer | None, color_count: int) -> ColorAnalysis:
        """Extract colours from an already decoded buffer; ``None`` means no image."""

        if buffer is None:
            report = self._extractor.run(None, 0, 0, color_count)
            analysis = ColorAnalysis(colors=report.colors)
        else:
            report = self._extractor.run(buffer.pixels, buffer.width, buffer.height, color_count)
            analysis = ColorAnalysis(
                width=buffer.width,
                height=buffer.height,
                colors=report.colors,
                other_percentage=remainder_percentage(report.colors),
            )

        color_extraction_total.inc()
        color_extraction_samples.observe(report.total_sampled)
        logger.info(
            "Analysed %dx%d image: %d colours from %d samples",
            analysis.width,
            analysis.height,
            len(analysis.colors),
            report.total_sampled,
        )
        return analysis
