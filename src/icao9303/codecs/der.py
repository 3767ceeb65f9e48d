"""
BER/DER definite-length encoding for seal TLV structures.

Digital seals frame their features and signature as tag-length-value triples.
Lengths below 128 use the one-byte short form; longer values use the long
form, ``0x80 | k`` followed by ``k`` big-endian length octets. Seals never
need more than four length octets.
"""

from __future__ import annotations

from ..exceptions import DerLengthError, FieldRangeError, SignatureMarkerError

SIGNATURE_MARKER = 0xFF
MAX_LENGTH_OCTETS = 4
SHORT_FORM_LIMIT = 0x80


def length_to_der_length(length: int) -> bytes:
    """
    Encode a length in BER/DER definite form.

    Example:
        >>> length_to_der_length(435).hex()
        '8201b3'

    Raises:
        DerLengthError: If the length is negative or needs more than four octets
    """
    if length < 0:
        msg = f"Length must not be negative, got {length}"
        raise DerLengthError(msg)
    if length < SHORT_FORM_LIMIT:
        return bytes([length])
    octets = (length.bit_length() + 7) // 8
    if octets > MAX_LENGTH_OCTETS:
        msg = (
            f"The definite long-form length {length} needs {octets} octets, which is too big "
            "for the context of ICAO 9303 digital seals"
        )
        raise DerLengthError(msg)
    return bytes([SHORT_FORM_LIMIT | octets]) + length.to_bytes(octets, "big")


def der_length_size(first_byte: int) -> int:
    """Number of bytes taken by an encoded length starting with ``first_byte``."""
    if first_byte < SHORT_FORM_LIMIT:
        return 1
    return 1 + (first_byte & 0x7F)


def der_length_to_length(data: bytes) -> int:
    """
    Decode a BER/DER definite length from the start of ``data``.

    Bytes after the encoded length are ignored, so callers may pass the rest
    of a buffer.
    """
    if not data:
        msg = "Cannot read a DER length from empty data"
        raise DerLengthError(msg)
    first = data[0]
    if first < SHORT_FORM_LIMIT:
        return first
    octets = first & 0x7F
    if octets == 0 or octets > MAX_LENGTH_OCTETS:
        msg = (
            f"The definite long-form length declares {octets} octets; ICAO 9303 digital "
            f"seals allow 1-{MAX_LENGTH_OCTETS}"
        )
        raise DerLengthError(msg)
    if len(data) < 1 + octets:
        msg = f"DER length declares {octets} octets but only {len(data) - 1} follow"
        raise DerLengthError(msg)
    return int.from_bytes(data[1 : 1 + octets], "big")


def build_signature_zone(signature: bytes) -> bytes:
    """Frame raw signature data as marker, DER length and signature bytes."""
    return bytes([SIGNATURE_MARKER]) + length_to_der_length(len(signature)) + bytes(signature)


def extract_signature(data: bytes, start: int = 0) -> bytes:
    """
    Read the signature zone beginning at ``start``.

    The zone must run to the end of ``data``.

    Raises:
        SignatureMarkerError: If ``data[start]`` is not the signature marker
        FieldRangeError: If the declared length differs from the bytes present
    """
    if start >= len(data) or data[start] != SIGNATURE_MARKER:
        found = f"{data[start]:02X}" if start < len(data) else "end of data"
        msg = f"Value '{found}' does not match signature marker ({SIGNATURE_MARKER:02X})"
        raise SignatureMarkerError(msg)
    start += 1
    length = der_length_to_length(data[start:])
    start += der_length_size(data[start])
    signature = bytes(data[start:])
    if len(signature) != length:
        msg = f"Length '{length}' of signature does not match the actual length ({len(signature)})"
        raise FieldRangeError(msg)
    return signature
