from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_dotenv() -> None:
    if os.getenv("OCRBRIDGE_SKIP_DOTENV") == "1":
        return

    env_path = Path(__file__).resolve().parents[2] / ".env"
    if not env_path.exists():
        return

    from dotenv import load_dotenv

    # Real environment variables take precedence over the file.
    load_dotenv(env_path, override=False)


def _parse_positive_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True)
class Settings:
    ocr_backend: str
    surya_endpoint: str
    surya_token: str | None
    surya_timeout_seconds: float
    surya_mime_type: str | None
    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_dotenv()

    ocr_backend = os.getenv("OCRBRIDGE_OCR_BACKEND", "mock").strip().lower() or "mock"
    log_level = os.getenv("OCRBRIDGE_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    return Settings(
        ocr_backend=ocr_backend,
        surya_endpoint=(os.getenv("SURYA_ENDPOINT") or "").strip(),
        surya_token=_optional(os.getenv("SURYA_AUTH_TOKEN")),
        surya_timeout_seconds=_parse_positive_float(os.getenv("SURYA_TIMEOUT_SECONDS"), default=60.0),
        surya_mime_type=_optional(os.getenv("SURYA_MIME_TYPE")),
        log_level=log_level,
    )
