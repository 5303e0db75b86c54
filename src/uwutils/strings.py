"""String helpers."""

from __future__ import annotations


def trim(text: str | None, count: int | None) -> str:
    """Drop ``count`` characters from both ends of ``text``.

    ``None`` text yields ``""``; a missing or non-positive ``count`` returns
    ``text`` unchanged; a ``count`` above half the length yields ``""``.

    Returns
    -------
    str
        Trimmed text.
    """
    if text is None:
        return ""
    if count is None or count <= 0:
        return text
    if count > len(text) // 2:
        return ""
    return text[count : len(text) - count]


__all__ = ["trim"]
