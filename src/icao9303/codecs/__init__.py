"""Byte-level codecs used by visible digital seals."""

from __future__ import annotations

from .c40 import SHIFT1, c40_decode, c40_encode
from .dates import bytes_to_date, date_to_bytes
from .der import (
    SIGNATURE_MARKER,
    build_signature_zone,
    der_length_size,
    der_length_to_length,
    extract_signature,
    length_to_der_length,
)

__all__ = [
    "SHIFT1",
    "SIGNATURE_MARKER",
    "build_signature_zone",
    "bytes_to_date",
    "c40_decode",
    "c40_encode",
    "date_to_bytes",
    "der_length_size",
    "der_length_to_length",
    "extract_signature",
    "length_to_der_length",
]
