"""OCR provider implementations."""

from ocrbridge.infra.ocr.mock import MockOCR
from ocrbridge.infra.ocr.surya import SuryaConfig, SuryaOCR

__all__ = [
    "MockOCR",
    "SuryaConfig",
    "SuryaOCR",
]
