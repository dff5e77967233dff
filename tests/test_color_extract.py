"""End-to-end tests for the dominant colour extractor."""

from __future__ import annotations

import pytest

from chromalyze.imgproc.clustering import Cluster
from chromalyze.imgproc.color_extract import ColorExtractor, ColorResult, rank_clusters
from tests.helpers import pack_pixels, solid_buffer


@pytest.fixture
def extractor() -> ColorExtractor:
    return ColorExtractor()


def _two_halves(width: int, height: int) -> bytes:
    top = [(255, 0, 0, 255)] * (width * height // 2)
    bottom = [(0, 0, 255, 255)] * (width * height // 2)
    return pack_pixels(top + bottom)


def _patterned(width: int, height: int) -> bytes:
    return pack_pixels(
        (x * 6 % 256, y * 6 % 256, (x + y) * 3 % 256, 255)
        for y in range(height)
        for x in range(width)
    )


def test_uniform_image_yields_single_full_coverage_colour(extractor: ColorExtractor) -> None:
    pixels = solid_buffer((200, 100, 50, 255), 12, 9)

    result = extractor.extract_palette(pixels, 12, 9, 5)

    assert result == [ColorResult(rgb=(200, 100, 50), percentage=100.0)]
    assert result[0].display_string == "rgb(200,100,50)"
    assert result[0].hex == "#c86432"


def test_fully_transparent_image_yields_nothing(extractor: ColorExtractor) -> None:
    pixels = solid_buffer((200, 100, 50, 0), 16, 16)

    assert extractor.extract_palette(pixels, 16, 16, 5) == []


def test_two_halves_split_evenly_in_scan_order(extractor: ColorExtractor) -> None:
    result = extractor.extract_palette(_two_halves(8, 8), 8, 8, 5)

    assert [(color.rgb, color.percentage) for color in result] == [
        ((255, 0, 0), 50.0),
        ((0, 0, 255), 50.0),
    ]


def test_zero_or_negative_colour_count_yields_nothing(extractor: ColorExtractor) -> None:
    pixels = _patterned(20, 20)

    assert extractor.extract_palette(pixels, 20, 20, 0) == []
    assert extractor.extract_palette(pixels, 20, 20, -3) == []


def test_missing_buffer_is_empty_not_an_error(extractor: ColorExtractor) -> None:
    assert extractor.extract_palette(None, 0, 0) == []
    assert extractor.extract_palette(b"", 10, 10) == []


@pytest.mark.parametrize("color_count", [1, 3, 5, 12])
def test_output_is_bounded_and_sorted(extractor: ColorExtractor, color_count: int) -> None:
    result = extractor.extract_palette(_patterned(40, 40), 40, 40, color_count)

    assert 0 < len(result) <= color_count
    assert all(color.percentage > 0.5 for color in result)
    assert all(
        first.percentage >= second.percentage for first, second in zip(result, result[1:])
    )
    for color in result:
        assert all(0 <= channel <= 255 for channel in color.rgb)


def test_extraction_is_deterministic(extractor: ColorExtractor) -> None:
    pixels = _patterned(30, 30)

    assert extractor.extract_palette(pixels, 30, 30, 8) == ColorExtractor().extract_palette(
        pixels, 30, 30, 8
    )


def test_run_reports_intermediate_counts(extractor: ColorExtractor) -> None:
    report = extractor.run(_two_halves(8, 8), 8, 8, 5)

    assert report.total_sampled == 16
    assert report.bucket_count == 2
    assert report.cluster_count == 2


def test_rank_drops_minor_clusters_and_truncates() -> None:
    clusters = [
        Cluster(rgb=(10, 10, 10), percentage=0.5),
        Cluster(rgb=(20, 20, 20), percentage=33.3333),
        Cluster(rgb=(30, 30, 30), percentage=0.51),
        Cluster(rgb=(40, 40, 40), percentage=66.1567),
    ]

    result = rank_clusters(clusters, 2)

    assert result == [
        ColorResult(rgb=(40, 40, 40), percentage=66.16),
        ColorResult(rgb=(20, 20, 20), percentage=33.33),
    ]


def test_rank_keeps_cluster_order_for_ties() -> None:
    clusters = [
        Cluster(rgb=(1, 2, 3), percentage=25.0),
        Cluster(rgb=(4, 5, 6), percentage=50.0),
        Cluster(rgb=(7, 8, 9), percentage=25.0),
    ]

    assert [color.rgb for color in rank_clusters(clusters, 5)] == [(4, 5, 6), (1, 2, 3), (7, 8, 9)]


def test_rank_clamps_reported_channels() -> None:
    result = rank_clusters([Cluster(rgb=(300, -5, 128), percentage=10.0)], 1)

    assert result[0].rgb == (255, 0, 128)
    assert (result[0].r, result[0].g, result[0].b) == (255, 0, 128)


def test_percentage_ties_round_upward(extractor: ColorExtractor) -> None:
    groups = [(255, 0, 0, 255)] * 703 + [(0, 0, 255, 255)] * 97
    pixels = pack_pixels(pixel for pixel in groups for _ in range(4))

    result = extractor.extract_palette(pixels, len(groups) * 4, 1, 5)

    assert [color.rgb for color in result] == [(255, 0, 0), (0, 0, 255)]
    # 97 / 800 is exactly 12.125; half-to-even would report 12.12.
    assert result[1].percentage == 12.13


def test_rank_threshold_applies_before_rounding() -> None:
    result = rank_clusters(
        [
            Cluster(rgb=(0, 0, 255), percentage=0.502),
            Cluster(rgb=(255, 0, 0), percentage=0.5),
        ],
        5,
    )

    assert result == [ColorResult(rgb=(0, 0, 255), percentage=0.5)]
