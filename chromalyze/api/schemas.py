"""Response models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from chromalyze.imgproc.color_extract import ColorResult
from chromalyze.services.analysis import ColorAnalysis


class ColorEntry(BaseModel):
    """Single dominant colour as returned to clients."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    percentage: float
    display: str
    hex: str

    @classmethod
    def from_result(cls, result: ColorResult) -> "ColorEntry":
        return cls(
            r=result.r,
            g=result.g,
            b=result.b,
            percentage=result.percentage,
            display=result.display_string,
            hex=result.hex,
        )


class ColorAnalysisResponse(BaseModel):
    """Payload of ``POST /colors``."""

    width: int
    height: int
    colors: list[ColorEntry]
    other_percentage: float

    @classmethod
    def from_analysis(cls, analysis: ColorAnalysis) -> "ColorAnalysisResponse":
        return cls(
            width=analysis.width,
            height=analysis.height,
            colors=[ColorEntry.from_result(color) for color in analysis.colors],
            other_percentage=analysis.other_percentage,
        )
