from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from ocrbridge.core.config import Settings, get_settings  # noqa: E402
from ocrbridge.core.context import CallContext  # noqa: E402
from ocrbridge.core.logging import configure_logging  # noqa: E402
from ocrbridge.domain.errors import OCRError  # noqa: E402
from ocrbridge.infra.factory import build_ocr  # noqa: E402


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        "ocr_backend": args.backend,
        "surya_endpoint": args.endpoint,
        "surya_token": args.token,
        "surya_timeout_seconds": args.timeout,
        "surya_mime_type": args.mime_type,
    }
    return dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run OCR on one or more page images and print the results as JSON."
    )
    parser.add_argument("images", type=Path, nargs="+", help="Page image paths, in page order")
    parser.add_argument("--backend", choices=["surya", "mock"], default=None, help="OCR provider")
    parser.add_argument("--endpoint", default=None, help="Surya OCR endpoint URL")
    parser.add_argument("--token", default=None, help="Bearer token for the Surya endpoint")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--deadline", type=float, default=None, help="Overall deadline in seconds")
    parser.add_argument("--mime-type", default=None, help="Send this MIME type instead of detecting it")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = _apply_overrides(get_settings(), args)
    configure_logging(settings.log_level)

    paths = [path.expanduser().resolve() for path in args.images]
    for path in paths:
        if not path.is_file():
            print(f"Input file not found: {path}", file=sys.stderr)
            return 2

    ctx = CallContext(args.deadline)
    results = []
    with build_ocr(settings) as ocr:
        for page, path in enumerate(paths, start=1):
            try:
                result = ocr.process_image(ctx, path.read_bytes(), page)
            except OCRError as exc:
                print(f"OCR failed for page {page} ({path.name}): {exc}", file=sys.stderr)
                return 1
            results.append({"file": str(path), **result.to_dict()})

    print(json.dumps(results, ensure_ascii=False, indent=2 if args.pretty else None))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
