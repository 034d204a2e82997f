from __future__ import annotations

import base64
import logging
import threading
import time
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from ocrbridge.core.context import CallContext
from ocrbridge.domain.errors import (
    OCRCancelledError,
    OCRConfigurationError,
    OCRDeadlineExceeded,
    OCRDecodeError,
    OCRError,
    OCRRemoteError,
    OCRRequestError,
    OCRResponseReadError,
    OCRTransportError,
)
from ocrbridge.domain.models import BoundingBox, OCRLine, OCRResult
from ocrbridge.infra.ports.ocr import OCRPort
from ocrbridge.schemas.surya import SuryaImagePayload, SuryaRequest, SuryaResponse
from ocrbridge.utils.mime import detect_image_mime

# How long an abandoned round-trip gets to close its response before the caller returns.
_ABORT_GRACE_SECONDS = 0.1


@dataclass(frozen=True)
class SuryaConfig:
    endpoint: str
    token: str | None = None
    # Upper bound for one whole round-trip, headers and body included.
    timeout_seconds: float = 60.0
    # None: sniff the type from the image bytes.
    mime_type: str | None = None


def _timeout_error(ctx: CallContext, exc: httpx.TimeoutException, stage: str) -> OCRError:
    if ctx.expired:
        return OCRDeadlineExceeded(f"context deadline exceeded while {stage}")
    return OCRTransportError(f"surya API timed out while {stage}: {exc}")


class _Exchange:
    """One HTTP round-trip, run on a worker thread while the caller waits.

    The worker owns the response and always closes it. ``abort()`` makes it
    stop at the next body chunk.
    """

    def __init__(self, client: httpx.Client, request: httpx.Request, ctx: CallContext):
        self._client = client
        self._request = request
        self._ctx = ctx
        self._aborted = threading.Event()
        self.wakeup = threading.Event()
        self.done = threading.Event()
        self.status_code: int | None = None
        self.body = b""
        self.error: Exception | None = None

    def abort(self) -> None:
        self._aborted.set()

    def run(self) -> None:
        try:
            self.status_code, self.body = self._round_trip()
        except Exception as exc:
            self.error = exc
        finally:
            self.done.set()
            self.wakeup.set()

    def _round_trip(self) -> tuple[int, bytes]:
        try:
            response = self._client.send(self._request, stream=True)
        except httpx.TimeoutException as exc:
            raise _timeout_error(self._ctx, exc, "sending request") from exc
        except httpx.HTTPError as exc:
            raise OCRTransportError(f"failed to send HTTP request: {exc}") from exc

        try:
            self._raise_if_stopped()
            if response.status_code != httpx.codes.OK:
                try:
                    body = self._read_body(response)
                except httpx.HTTPError:
                    body = b""
                return response.status_code, body

            try:
                body = self._read_body(response)
            except httpx.TimeoutException as exc:
                raise _timeout_error(self._ctx, exc, "reading response body") from exc
            except httpx.HTTPError as exc:
                raise OCRResponseReadError(f"failed to read surya API response body: {exc}") from exc
            return response.status_code, body
        finally:
            response.close()

    def _read_body(self, response: httpx.Response) -> bytes:
        chunks: list[bytes] = []
        for chunk in response.iter_bytes():
            self._raise_if_stopped()
            chunks.append(chunk)
        return b"".join(chunks)

    def _raise_if_stopped(self) -> None:
        if self._aborted.is_set():
            raise OCRCancelledError("request aborted")
        self._ctx.raise_if_done()


class SuryaOCR(OCRPort):
    """Surya OCR over HTTP: one JSON POST per page image, no retries."""

    provider_name = "surya"

    def __init__(
        self,
        config: SuryaConfig,
        *,
        client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = client is None
        self._client = client or httpx.Client()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def process_image(self, ctx: CallContext, image_data: bytes, page: int) -> OCRResult:
        self.logger.info("Processing image with Surya OCR provider for page %d", page)

        if not self.config.endpoint:
            raise OCRConfigurationError("Surya endpoint is not configured (SURYA_ENDPOINT)")

        ctx.raise_if_done()
        request = self._build_request(ctx, image_data)

        self.logger.debug("Sending page %d to %s", page, self.config.endpoint)
        exchange = _Exchange(self._client, request, ctx)
        self._wait(ctx, exchange, page)

        if exchange.error is not None:
            raise exchange.error

        self.logger.info("Surya API response status code: %d (page %d)", exchange.status_code, page)
        if exchange.status_code != httpx.codes.OK:
            raise OCRRemoteError(exchange.status_code, exchange.body.decode("utf-8", errors="replace"))
        return self._decode(exchange.body, page)

    def _wait(self, ctx: CallContext, exchange: _Exchange, page: int) -> None:
        """Block until the exchange finishes, the context ends or the round-trip budget runs out."""
        worker = threading.Thread(target=exchange.run, name=f"surya-ocr-page-{page}", daemon=True)
        budget_deadline = time.monotonic() + self.config.timeout_seconds
        wake = exchange.wakeup.set

        ctx.add_done_callback(wake)
        try:
            worker.start()
            while not exchange.done.is_set():
                wait_for = budget_deadline - time.monotonic()
                remaining = ctx.remaining()
                if remaining is not None:
                    wait_for = min(wait_for, remaining)
                if ctx.cancelled or wait_for <= 0:
                    break
                exchange.wakeup.wait(wait_for)
                exchange.wakeup.clear()
        finally:
            ctx.remove_done_callback(wake)

        if exchange.done.is_set():
            return

        exchange.abort()
        worker.join(_ABORT_GRACE_SECONDS)
        self.logger.warning("Abandoned Surya request for page %d", page)
        if ctx.cancelled:
            raise OCRCancelledError("context cancelled while waiting for surya API")
        if ctx.expired:
            raise OCRDeadlineExceeded("context deadline exceeded while waiting for surya API")
        raise OCRTransportError(f"surya API did not respond within {self.config.timeout_seconds}s")

    def _build_request(self, ctx: CallContext, image_data: bytes) -> httpx.Request:
        payload = SuryaRequest(
            image=SuryaImagePayload(
                mime_type=self.config.mime_type or detect_image_mime(image_data),
                data=base64.b64encode(image_data).decode("ascii"),
            )
        )

        headers = {"Content-Type": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        timeout = self.config.timeout_seconds
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        try:
            request = self._client.build_request(
                "POST",
                self.config.endpoint,
                content=payload.model_dump_json(by_alias=True),
                headers=headers,
                timeout=httpx.Timeout(timeout),
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise OCRRequestError(f"failed to create HTTP request: {exc}") from exc

        if request.url.scheme not in {"http", "https"}:
            raise OCRRequestError(f"failed to create HTTP request: unsupported URL {self.config.endpoint!r}")
        return request

    @staticmethod
    def _decode(body: bytes, page: int) -> OCRResult:
        try:
            parsed = SuryaResponse.model_validate_json(body)
        except ValidationError as exc:
            raise OCRDecodeError(exc, body.decode("utf-8", errors="replace")) from exc

        lines = None
        if parsed.lines is not None:
            lines = [OCRLine(text=line.text, bbox=BoundingBox(*line.box)) for line in parsed.lines]
        return OCRResult(text=parsed.text, lines=lines, page=page)
