from __future__ import annotations

from ocrbridge.core.context import CallContext
from ocrbridge.domain.models import BoundingBox, OCRLine, OCRResult
from ocrbridge.infra.ports.ocr import OCRPort


class MockOCR(OCRPort):
    provider_name = "mock"

    def process_image(self, ctx: CallContext, image_data: bytes, page: int) -> OCRResult:
        ctx.raise_if_done()
        size_hint = max(1, len(image_data) // 256)
        return OCRResult(
            text="[mock] OCR text",
            lines=[
                OCRLine(
                    text="[mock] OCR text",
                    bbox=BoundingBox(left=0, top=0, right=20 * size_hint, bottom=20),
                )
            ],
            page=page,
        )
