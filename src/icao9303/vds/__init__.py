"""Visible digital seals: zone codecs, feature codecs and barcode payloads."""

from __future__ import annotations

from .barcode import decode_barcode_payload, encode_barcode_payload, generate_qr_code
from .constants import MAGIC, SIGNATURE_MARKER, VERSION_3, VERSION_4
from .features import (
    CREW_ID_SEAL_LAYOUT,
    CREW_SEAL_LAYOUT,
    MRVA_SEAL_LAYOUT,
    MRVB_SEAL_LAYOUT,
    PASSPORT_SEAL_LAYOUT,
    SealMRZLayout,
    decode_duration_of_stay,
    decode_entries,
    decode_hex_code,
    derive_fields,
    derive_seal_feature,
    encode_entries,
    encode_hex_code,
    validate_duration_of_stay,
)
from .seal import DigitalSeal, DigitalSealV3, DigitalSealV4

__all__ = [
    "CREW_ID_SEAL_LAYOUT",
    "CREW_SEAL_LAYOUT",
    "MAGIC",
    "MRVA_SEAL_LAYOUT",
    "MRVB_SEAL_LAYOUT",
    "PASSPORT_SEAL_LAYOUT",
    "SIGNATURE_MARKER",
    "VERSION_3",
    "VERSION_4",
    "DigitalSeal",
    "DigitalSealV3",
    "DigitalSealV4",
    "SealMRZLayout",
    "decode_barcode_payload",
    "decode_duration_of_stay",
    "decode_entries",
    "decode_hex_code",
    "derive_fields",
    "derive_seal_feature",
    "encode_barcode_payload",
    "encode_entries",
    "encode_hex_code",
    "generate_qr_code",
    "validate_duration_of_stay",
]
