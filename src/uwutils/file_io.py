"""Byte stream reading with consistent encoding handling."""

from __future__ import annotations

import io
import tokenize
from typing import BinaryIO


def detect_encoding(data: bytes, *, default: str = "utf-8") -> str:
    """Detect text encoding using tokenize rules (BOM or coding cookie)."""
    try:
        encoding, _ = tokenize.detect_encoding(io.BytesIO(data).readline)
    except (LookupError, SyntaxError):
        return default
    return encoding


def decode_bytes(data: bytes, *, default: str = "utf-8") -> str:
    """Decode bytes with the detected encoding, replacing invalid sequences."""
    return data.decode(detect_encoding(data, default=default), errors="replace")


def read_stream_text(stream: BinaryIO) -> str:
    """Read a binary stream to exhaustion and decode it.

    The stream is closed before returning, including when reading fails.
    """
    with stream:
        data = stream.read()
    return decode_bytes(data)


__all__ = ["decode_bytes", "detect_encoding", "read_stream_text"]
