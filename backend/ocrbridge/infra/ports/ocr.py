from __future__ import annotations

from abc import ABC, abstractmethod

from ocrbridge.core.context import CallContext
from ocrbridge.domain.models import OCRResult


class OCRPort(ABC):
    provider_name = "base"

    @abstractmethod
    def process_image(self, ctx: CallContext, image_data: bytes, page: int) -> OCRResult:
        """Return OCR text (and lines, when available) for one page image."""

    def close(self) -> None:
        """Release provider resources. Providers may override."""

    def __enter__(self) -> OCRPort:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
