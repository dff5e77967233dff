"""Greedy merging of quantised buckets into colour clusters."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from chromalyze.imgproc.quantize import Bucket, round_half_away

logger = logging.getLogger(__name__)

MERGE_THRESHOLD = 20.0


@dataclass(slots=True)
class Cluster:
    """Accumulated colour and coverage of one or more merged buckets."""

    rgb: tuple[int, int, int]
    percentage: float

    @classmethod
    def from_bucket(cls, bucket: Bucket) -> "Cluster":
        r, g, b = bucket.mean_rgb
        return cls(
            rgb=(round_half_away(r), round_half_away(g), round_half_away(b)),
            percentage=bucket.percentage,
        )

    def distance_to(self, rgb: Iterable[float]) -> float:
        return math.dist(self.rgb, tuple(rgb))

    def absorb(self, bucket: Bucket) -> None:
        """Blend ``bucket`` in, weighting both colours by their coverage."""

        total = self.percentage + bucket.percentage
        self.rgb = tuple(
            round_half_away(
                (own * self.percentage + other * bucket.percentage) / total
            )
            for own, other in zip(self.rgb, bucket.mean_rgb)
        )
        self.percentage = total


def merge_buckets(
    buckets: Iterable[Bucket],
    threshold: float = MERGE_THRESHOLD,
) -> list[Cluster]:
    """Merge buckets into clusters, largest coverage first.

    Each bucket joins the *first* existing cluster closer than ``threshold``,
    scanning clusters in creation order; otherwise it starts a new cluster.
    Ties in coverage keep the buckets' incoming order.
    """

    clusters: list[Cluster] = []
    for bucket in sorted(buckets, key=lambda item: item.percentage, reverse=True):
        target = next(
            (cluster for cluster in clusters if cluster.distance_to(bucket.mean_rgb) < threshold),
            None,
        )
        if target is None:
            clusters.append(Cluster.from_bucket(bucket))
        else:
            target.absorb(bucket)

    logger.debug("Merged buckets into %d clusters", len(clusters))
    return clusters
