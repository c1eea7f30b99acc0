"""Filename sanitization for outgoing multipart uploads."""

import re
from pathlib import PurePosixPath

from core.utils.constants import DEFAULT_UPLOAD_FILENAME

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_EDGE_SEPARATORS = "._-"


def sanitize_filename(name: str | None, *, default: str = DEFAULT_UPLOAD_FILENAME) -> str:
    """Reduce ``name`` to a safe base filename.

    Directory components are dropped, every character outside
    ``[A-Za-z0-9._-]`` becomes ``_`` and leading/trailing separators are
    stripped. Falls back to ``default`` when nothing usable remains.

    Sanitizing an already sanitized name returns it unchanged.
    """
    base = PurePosixPath((name or "").strip()).name.strip()
    if not base:
        return default

    cleaned = _UNSAFE_CHARS.sub("_", base).strip(_EDGE_SEPARATORS)
    return cleaned or default
