"""Dominant colour extraction utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from chromalyze.imgproc.clustering import MERGE_THRESHOLD, Cluster, merge_buckets
from chromalyze.imgproc.quantize import quantize_samples
from chromalyze.imgproc.sampling import SAMPLE_STRIDE, iter_samples

logger = logging.getLogger(__name__)

DEFAULT_COLOR_COUNT = 5
MIN_COVERAGE = 0.5


def _round_percentage(value: float) -> float:
    """Round to 2 decimals on the exact binary value, ties upward."""

    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _clamp_channel(value: int) -> int:
    return max(0, min(255, int(value)))


@dataclass(frozen=True, slots=True)
class ColorResult:
    """A representative colour and the share of sampled pixels it covers."""

    rgb: tuple[int, int, int]
    percentage: float

    @property
    def r(self) -> int:
        return self.rgb[0]

    @property
    def g(self) -> int:
        return self.rgb[1]

    @property
    def b(self) -> int:
        return self.rgb[2]

    @property
    def display_string(self) -> str:
        return "rgb({},{},{})".format(*self.rgb)

    @property
    def hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.rgb)

    @classmethod
    def from_cluster(cls, cluster: Cluster) -> "ColorResult":
        r, g, b = cluster.rgb
        return cls(
            rgb=(_clamp_channel(r), _clamp_channel(g), _clamp_channel(b)),
            percentage=_round_percentage(cluster.percentage),
        )


def rank_clusters(clusters: Iterable[Cluster], color_count: int) -> list[ColorResult]:
    """Keep clusters above ``MIN_COVERAGE`` and return the top ``color_count``.

    The threshold applies to the unrounded coverage, so a cluster just above it
    can be reported as ``0.5``.
    """

    if color_count <= 0:
        return []

    kept = [cluster for cluster in clusters if cluster.percentage > MIN_COVERAGE]
    kept.sort(key=lambda cluster: cluster.percentage, reverse=True)
    return [ColorResult.from_cluster(cluster) for cluster in kept[:color_count]]


@dataclass(slots=True)
class ExtractionReport:
    """Ranked colours plus the intermediate counts of a single extraction."""

    colors: list[ColorResult] = field(default_factory=list)
    total_sampled: int = 0
    bucket_count: int = 0
    cluster_count: int = 0


class ColorExtractor:
    """Quantise-and-merge dominant colour detector for RGBA pixel buffers."""

    def __init__(self, stride: int = SAMPLE_STRIDE, merge_threshold: float = MERGE_THRESHOLD) -> None:
        self._stride = stride
        self._merge_threshold = merge_threshold

    def run(
        self,
        pixels: Sequence[int] | bytes | None,
        width: int,
        height: int,
        color_count: int = DEFAULT_COLOR_COUNT,
    ) -> ExtractionReport:
        """Run sampling, quantisation, merging and ranking over one buffer."""

        if color_count <= 0 or not pixels:
            return ExtractionReport()

        bucket_set = quantize_samples(iter_samples(pixels, width, height, self._stride))
        clusters = merge_buckets(bucket_set.buckets, self._merge_threshold)
        colors = rank_clusters(clusters, color_count)

        logger.debug(
            "Extracted %d colours from %dx%d buffer (%d samples, %d buckets, %d clusters)",
            len(colors),
            width,
            height,
            bucket_set.total_sampled,
            len(bucket_set.buckets),
            len(clusters),
        )
        return ExtractionReport(
            colors=colors,
            total_sampled=bucket_set.total_sampled,
            bucket_count=len(bucket_set.buckets),
            cluster_count=len(clusters),
        )

    def extract_palette(
        self,
        pixels: Sequence[int] | bytes | None,
        width: int,
        height: int,
        color_count: int = DEFAULT_COLOR_COUNT,
    ) -> list[ColorResult]:
        """Return up to ``color_count`` dominant colours, most common first."""

        return self.run(pixels, width, height, color_count).colors
