"""Normalization helpers for optional free-text fields."""


def normalize_optional_text(value: str | None) -> str | None:
    """Trim ``value``; blank or missing input becomes ``None``.

    An empty string is never returned, so "cleared" and "absent" collapse
    into the same representation.
    """
    if value is None:
        return None

    trimmed = value.strip()
    return trimmed or None
