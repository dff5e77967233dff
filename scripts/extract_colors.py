"""Print the dominant colours of one or more image files."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

from chromalyze.config.settings import get_settings
from chromalyze.imgproc.normalize import ImageDecodeError
from chromalyze.monitoring.logging import configure_logging
from chromalyze.services.analysis import ColorAnalysis, ColorAnalysisService


def _format_analysis(path: Path, analysis: ColorAnalysis) -> str:
    lines = [f"{path} ({analysis.width}x{analysis.height})"]
    if not analysis.colors:
        lines.append("  no opaque pixels")
    for color in analysis.colors:
        lines.append(f"  {color.display_string:<18} {color.hex}  {color.percentage:6.2f}%")
    if analysis.other_percentage:
        lines.append(f"  {'other':<18} {'':7}  {analysis.other_percentage:6.2f}%")
    return "\n".join(lines)


def print_results(service: ColorAnalysisService, paths: Iterable[Path], color_count: int) -> int:
    failures = 0
    for path in paths:
        try:
            analysis = service.analyse_bytes(path.read_bytes(), color_count)
        except (OSError, ImageDecodeError) as exc:
            failures += 1
            print(f"❌ {path}: {exc}")
            continue
        print(_format_analysis(path, analysis))
    return failures


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("images", nargs="+", type=Path)
    parser.add_argument("--colors", type=int, default=settings.default_color_count)
    args = parser.parse_args()

    configure_logging()
    failures = print_results(ColorAnalysisService(settings), args.images, args.colors)
    raise SystemExit(1 if failures else 0)


if __name__ == "__main__":
    main()
