"""Image MIME type sniffing from leading magic bytes."""

from __future__ import annotations

DEFAULT_IMAGE_MIME = "image/jpeg"

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
)

# "BM", file size, two reserved words, pixel data offset.
_BMP_FILE_HEADER_SIZE = 14


def _is_bmp(head: bytes) -> bool:
    if len(head) < _BMP_FILE_HEADER_SIZE or not head.startswith(b"BM"):
        return False
    file_size = int.from_bytes(head[2:6], "little")
    pixel_offset = int.from_bytes(head[10:14], "little")
    if head[6:10] != b"\x00\x00\x00\x00" or pixel_offset < _BMP_FILE_HEADER_SIZE:
        return False
    # Some writers leave the file size at zero.
    return file_size == 0 or pixel_offset <= file_size


def detect_image_mime(image_bytes: bytes, default: str = DEFAULT_IMAGE_MIME) -> str:
    """Return the MIME type for ``image_bytes``, or ``default`` if unknown."""
    head = bytes(image_bytes[:16])
    # RIFF container: only WEBP is an image format we recognise.
    if head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime in _SIGNATURES:
        if head.startswith(signature):
            return mime
    if _is_bmp(head):
        return "image/bmp"
    return default
