"""Image decoding and dominant colour extraction."""

from .color_extract import ColorExtractor, ColorResult, ExtractionReport, rank_clusters
from .normalize import ImageDecodeError, ImageNormalizer, PixelBuffer

__all__ = [
    "ColorExtractor",
    "ColorResult",
    "ExtractionReport",
    "ImageDecodeError",
    "ImageNormalizer",
    "PixelBuffer",
    "rank_clusters",
]
