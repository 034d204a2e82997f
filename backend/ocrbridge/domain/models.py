from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    left: float
    top: float
    right: float
    bottom: float

    def as_dict(self) -> dict[str, float]:
        return {"x1": self.left, "y1": self.top, "x2": self.right, "y2": self.bottom}


@dataclass(frozen=True)
class OCRLine:
    text: str
    bbox: BoundingBox


@dataclass
class OCRResult:
    text: str
    # None when the provider did not report lines at all.
    lines: list[OCRLine] | None = None
    page: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "text": self.text,
            "lines": None
            if self.lines is None
            else [{"text": line.text, "bbox": line.bbox.as_dict()} for line in self.lines],
        }
