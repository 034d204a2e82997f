import os
import sys
from pathlib import Path


# Keep tests deterministic and local-only.
os.environ["OCRBRIDGE_SKIP_DOTENV"] = "1"
os.environ["OCRBRIDGE_OCR_BACKEND"] = "mock"
os.environ["OCRBRIDGE_LOG_LEVEL"] = "WARNING"
os.environ["SURYA_ENDPOINT"] = ""
os.environ["SURYA_AUTH_TOKEN"] = ""
os.environ.pop("SURYA_TIMEOUT_SECONDS", None)
os.environ.pop("SURYA_MIME_TYPE", None)

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
