from __future__ import annotations

from functools import lru_cache

from ocrbridge.core.config import Settings, get_settings
from ocrbridge.infra.ocr.mock import MockOCR
from ocrbridge.infra.ocr.surya import SuryaConfig, SuryaOCR
from ocrbridge.infra.ports.ocr import OCRPort


def build_surya_config(settings: Settings) -> SuryaConfig:
    return SuryaConfig(
        endpoint=settings.surya_endpoint,
        token=settings.surya_token,
        timeout_seconds=settings.surya_timeout_seconds,
        mime_type=settings.surya_mime_type,
    )


def build_ocr(settings: Settings) -> OCRPort:
    if settings.ocr_backend == "surya":
        # An empty endpoint is reported per call, not here.
        return SuryaOCR(build_surya_config(settings))
    return MockOCR()


@lru_cache(maxsize=1)
def get_ocr() -> OCRPort:
    return build_ocr(get_settings())
