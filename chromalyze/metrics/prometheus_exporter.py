"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


color_extraction_total = Counter(
    "color_extraction_total",
    "Total number of completed colour extraction requests.",
)

color_extraction_failures_total = Counter(
    "color_extraction_failures_total",
    "Colour extraction requests rejected before the engine ran.",
    ["reason"],
)

color_extraction_samples = Histogram(
    "color_extraction_samples",
    "Number of opaque pixels sampled per extraction.",
    buckets=(0, 100, 500, 1000, 2500, 5000, 10000, 25000),
)
