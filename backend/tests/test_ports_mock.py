import pytest

from ocrbridge.core.context import CallContext
from ocrbridge.domain.errors import OCRCancelledError
from ocrbridge.infra.ocr.mock import MockOCR
from ocrbridge.infra.ports.ocr import OCRPort


def test_mock_ocr_result_shape():
    ocr = MockOCR()
    result = ocr.process_image(CallContext.background(), b"img-bytes" * 100, 2)

    assert isinstance(ocr, OCRPort)
    assert result.text == "[mock] OCR text"
    assert result.page == 2
    assert len(result.lines) == 1
    assert result.lines[0].bbox.as_dict() == {"x1": 0, "y1": 0, "x2": 60, "y2": 20}


def test_mock_ocr_to_dict():
    result = MockOCR().process_image(CallContext.background(), b"img", 1)

    assert result.to_dict() == {
        "page": 1,
        "text": "[mock] OCR text",
        "lines": [{"text": "[mock] OCR text", "bbox": {"x1": 0, "y1": 0, "x2": 20, "y2": 20}}],
    }


def test_mock_ocr_honours_cancellation():
    ctx = CallContext.background()
    ctx.cancel()

    with pytest.raises(OCRCancelledError):
        MockOCR().process_image(ctx, b"img", 1)


def test_port_requires_process_image():
    class Incomplete(OCRPort):
        pass

    with pytest.raises(TypeError):
        Incomplete()
