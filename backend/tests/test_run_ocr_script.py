import importlib.util
import json
from pathlib import Path

import pytest

from ocrbridge.core.config import get_settings

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_ocr.py"


@pytest.fixture
def run_ocr():
    spec = importlib.util.spec_from_file_location("run_ocr_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    get_settings.cache_clear()
    yield module
    get_settings.cache_clear()


def test_mock_backend_prints_one_result_per_page(run_ocr, tmp_path: Path, capsys):
    first = tmp_path / "p1.jpg"
    second = tmp_path / "p2.png"
    first.write_bytes(b"\xff\xd8\xff jpeg")
    second.write_bytes(b"\x89PNG\r\n\x1a\n png")

    exit_code = run_ocr.main([str(first), str(second), "--backend", "mock"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert [item["page"] for item in output] == [1, 2]
    assert output[0]["file"] == str(first.resolve())
    assert output[1]["text"] == "[mock] OCR text"


def test_missing_file_returns_2(run_ocr, tmp_path: Path, capsys):
    exit_code = run_ocr.main([str(tmp_path / "missing.jpg"), "--backend", "mock"])

    assert exit_code == 2
    assert "Input file not found" in capsys.readouterr().err


def test_surya_without_endpoint_fails(run_ocr, tmp_path: Path, capsys):
    image = tmp_path / "page.jpg"
    image.write_bytes(b"\xff\xd8\xff jpeg")

    exit_code = run_ocr.main([str(image), "--backend", "surya"])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "page 1" in err
    assert "SURYA_ENDPOINT" in err


def test_expired_deadline_stops_before_first_page(run_ocr, tmp_path: Path, capsys):
    image = tmp_path / "page.jpg"
    image.write_bytes(b"\xff\xd8\xff jpeg")

    exit_code = run_ocr.main([str(image), "--backend", "mock", "--deadline", "0"])

    assert exit_code == 1
    assert "deadline exceeded" in capsys.readouterr().err


def test_generous_deadline_is_accepted(run_ocr, tmp_path: Path, capsys):
    image = tmp_path / "page.jpg"
    image.write_bytes(b"\xff\xd8\xff jpeg")

    exit_code = run_ocr.main([str(image), "--backend", "mock", "--deadline", "30", "--timeout", "5"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)[0]["page"] == 1
