"""Grid quantisation of RGB samples into running-mean buckets."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable

from chromalyze.imgproc.sampling import Sample

logger = logging.getLogger(__name__)

QUANT_STEP = 5

BucketKey = tuple[int, int, int]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (``2.5 -> 3``)."""

    rounded = math.floor(abs(value) + 0.5)
    return int(rounded) if value >= 0 else -int(rounded)


def quantize_channel(value: float) -> int:
    """Snap a channel value to the nearest multiple of ``QUANT_STEP``."""

    return round_half_away(value / QUANT_STEP) * QUANT_STEP


def quantize_key(sample: Sample) -> BucketKey:
    r, g, b = sample
    return quantize_channel(r), quantize_channel(g), quantize_channel(b)


@dataclass(slots=True)
class Bucket:
    """Samples sharing a quantised key, with their running mean colour."""

    key: BucketKey
    count: int
    mean_rgb: tuple[float, float, float]
    percentage: float = 0.0

    def add(self, sample: Sample) -> None:
        """Fold one more sample into the running mean."""

        previous = self.count
        self.count += 1
        self.mean_rgb = tuple(
            (mean * previous + channel) / self.count
            for mean, channel in zip(self.mean_rgb, sample)
        )


@dataclass(slots=True)
class BucketSet:
    """Quantiser output: buckets in first-seen order plus the sample total."""

    buckets: list[Bucket] = field(default_factory=list)
    total_sampled: int = 0


def quantize_samples(samples: Iterable[Sample]) -> BucketSet:
    """Consume ``samples`` and bucket them on the ``QUANT_STEP`` grid.

    Percentages are filled in once every sample has been seen, relative to the
    number of admitted samples. An empty input yields an empty ``BucketSet``.
    """

    buckets: dict[BucketKey, Bucket] = {}
    total = 0
    for sample in samples:
        total += 1
        key = quantize_key(sample)
        bucket = buckets.get(key)
        if bucket is None:
            r, g, b = sample
            buckets[key] = Bucket(key=key, count=1, mean_rgb=(float(r), float(g), float(b)))
        else:
            bucket.add(sample)

    for bucket in buckets.values():
        bucket.percentage = bucket.count / total * 100

    logger.debug("Quantised %d samples into %d buckets", total, len(buckets))
    return BucketSet(buckets=list(buckets.values()), total_sampled=total)
