from collections.abc import Mapping

from core.utils.constants import ALLOWED_MIME_TYPES, DEFAULT_UPLOAD_CONTENT_TYPE

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
}


def detect_mime_type(file_data: bytes) -> str:
    # WebP is a RIFF container; the format tag sits at offset 8.
    if file_data[:4] == b"RIFF" and file_data[8:12] == b"WEBP":
        return "image/webp"

    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")


def resolve_content_type(declared: str | None, file_data: bytes) -> str:
    """Pick the upload content type.

    The declared type wins when it is one of the allowed image types
    (parameters such as ``; charset=`` are ignored); otherwise the type is
    sniffed from the content.
    """
    header_type = (declared or "").split(";", 1)[0].strip().lower()
    if header_type in ALLOWED_MIME_TYPES:
        return header_type

    try:
        return detect_mime_type(file_data)
    except ValueError:
        return DEFAULT_UPLOAD_CONTENT_TYPE
