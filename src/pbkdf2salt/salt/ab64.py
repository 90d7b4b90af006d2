"""Adapted base64: the alphabet used inside PBKDF2 tokens.

Same bit packing as standard base64, but ``+`` is written as ``.`` and the
``=`` padding is dropped. This matches the encoding passlib uses for its
``$pbkdf2-*$`` hashes, so tokens are interchangeable.
"""

from __future__ import annotations

import base64
import binascii
import re

from .errors import MalformedEncodingError

AB64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789./"

_AB64_RE = re.compile(r"[A-Za-z0-9./]*")


def encoded_length(n_bytes: int) -> int:
    """Number of symbols needed for `n_bytes` raw bytes (no padding)."""
    return (4 * int(n_bytes) + 2) // 3


def encode(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii").rstrip("=").replace("+", ".")


def decode(text: str) -> bytes:
    if not isinstance(text, str) or not _AB64_RE.fullmatch(text):
        raise MalformedEncodingError("Character outside the adapted base64 alphabet")
    if len(text) % 4 == 1:
        raise MalformedEncodingError(f"Impossible encoded length: {len(text)}")

    pad = "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(text.replace(".", "+") + pad, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(str(e)) from e

    # Unused trailing bits must be zero, otherwise two texts map to one value.
    if encode(raw) != text:
        raise MalformedEncodingError("Non-canonical trailing bits")
    return raw
