"""Errors raised by OCR providers.

Every failure of a provider call surfaces as an ``OCRError`` subclass with
the root cause chained as ``__cause__``.
"""

from __future__ import annotations


class OCRError(RuntimeError):
    """Base class for OCR provider failures."""


class OCRConfigurationError(OCRError):
    """The provider is missing required configuration (e.g. the endpoint)."""


class OCRRequestError(OCRError):
    """The outgoing request could not be built."""


class OCRTransportError(OCRError):
    """The request could not be delivered or the connection failed."""


class OCRCancelledError(OCRError):
    """The caller's context was cancelled."""


class OCRDeadlineExceeded(OCRCancelledError):
    """The caller's context deadline passed before the call finished."""


class OCRRemoteError(OCRError):
    def __init__(self, status_code: int, body: str, *, provider: str = "surya"):
        super().__init__(f"{provider} API returned non-200 status code: {status_code}, body: {body}")
        self.status_code = status_code
        self.body = body


class OCRResponseReadError(OCRError):
    """The response body could not be read."""


class OCRDecodeError(OCRError):
    def __init__(self, cause: Exception, body: str, *, provider: str = "surya"):
        super().__init__(f"failed to decode {provider} API response: {cause}, body: {body}")
        self.body = body
