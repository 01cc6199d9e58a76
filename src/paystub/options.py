from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PageFormat = Literal["Letter", "A4"]

WATERMARK_MARKS = ("PREVIEW", "SAMPLE", "DRAFT")


@dataclass(frozen=True)
class Margins:
    top: float = 50
    right: float = 50
    bottom: float = 50
    left: float = 50

    @classmethod
    def uniform(cls, points: float) -> "Margins":
        return cls(points, points, points, points)


@dataclass(frozen=True)
class RenderOptions:
    watermark: bool = False
    page_format: PageFormat = "Letter"
    margins: Margins = Margins()

    @classmethod
    def preview(cls, **kwargs) -> "RenderOptions":
        return cls(watermark=True, **kwargs)

    @classmethod
    def final(cls, **kwargs) -> "RenderOptions":
        return cls(watermark=False, **kwargs)
