"""
Visible digital seals (ICAO 9303 Part 13).

A seal is three zones concatenated:

    header zone     magic, version, issuing authority, signer and certificate
                    reference, issue and signature dates, feature definition
                    reference, document type category
    message zone    (tag, length, value) for each feature, in insertion order
    signature zone  0xFF marker, DER length, signature bytes

``unsigned_seal`` is header + message, ``signed_seal`` adds the signature
zone. The ``load_*`` methods parse bytes completely and validate them before
any field of the seal changes.
"""

from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, ClassVar

from pydantic import Field, field_validator

from ..codecs.c40 import c40_decode, c40_encode
from ..codecs.dates import bytes_to_date, date_to_bytes
from ..codecs.der import (
    build_signature_zone,
    der_length_size,
    der_length_to_length,
    extract_signature,
    length_to_der_length,
)
from ..config import settings
from ..exceptions import FieldRangeError, FieldTypeError, SealFormatError
from ..models.base import FieldModel, as_text, check_mrz_text, parse_date
from ..utils.mrz_string import mrz_to_text, pad
from ..utils.validators import describe_errors, validate_hex_string, validate_identifier_code
from .constants import (
    AUTHORITY_C40_LENGTH,
    DATE_FIELD_LENGTH,
    MAGIC,
    SIGNATURE_MARKER,
    VERSION_3,
    VERSION_4,
)

logger = logging.getLogger(__name__)

MAX_BYTE_VALUE = 254
MAX_V3_FEATURE_LENGTH = 255
MAX_V4_CERT_REFERENCE_LENGTH = 255
V3_CERT_REFERENCE_LENGTH = 5
IDENTIFIER_LENGTH = 4


def _default_signature() -> bytes:
    return bytes(settings.signature_length)


def _take(data: bytes, offset: int, size: int, what: str) -> bytes:
    """Slice ``size`` bytes at ``offset`` or fail if the data ends early."""
    chunk = bytes(data[offset : offset + size])
    if len(chunk) != size:
        msg = f"Seal data ends before {what}: needed {size} bytes at offset {offset}, found {len(chunk)}"
        raise FieldRangeError(msg)
    return chunk


def _check_byte_value(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{label} must be an integer, got {type(value).__name__}."
        raise FieldTypeError(msg)
    if not 1 <= value <= MAX_BYTE_VALUE:
        msg = f"{label} must be in the range 1-{MAX_BYTE_VALUE}, got {value}."
        raise FieldRangeError(msg)
    return value


def as_bytes(value: Any, label: str) -> bytes:
    """Accept bytes-like values or a sequence of byte values."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        try:
            return bytes(value)
        except (TypeError, ValueError) as e:
            msg = f"{label} must only contain byte values 0-255."
            raise FieldRangeError(msg) from e
    msg = f"{label} must be bytes, got {type(value).__name__}."
    raise FieldTypeError(msg)


class DigitalSeal(FieldModel, ABC):
    """Fields and zone codecs shared by every seal version."""

    version: ClassVar[int]

    authority_code: str = "UTO"
    identifier_code: str = "UTSS"
    cert_reference: str = "00000"
    issue_date: date
    signature_date: date
    feature_definition: int = 0x01
    type_category: int = 0x01
    features: dict[int, bytes] = Field(default_factory=dict)
    signature_data: bytes = Field(default_factory=_default_signature)

    @field_validator("authority_code", mode="before")
    @classmethod
    def validate_authority_code(cls, v: Any) -> str:
        code = as_text(v, "Issuing authority (authority_code)")
        return mrz_to_text(check_mrz_text(code, "'authority_code'", minimum=1, maximum=3))

    @field_validator("identifier_code", mode="before")
    @classmethod
    def validate_identifier_code(cls, v: Any) -> str:
        code = as_text(v, "Signer identifier (identifier_code)")
        errors = validate_identifier_code(code)
        if errors:
            msg = f"Value set on 'identifier_code' has errors: {describe_errors(errors)}"
            raise FieldRangeError(msg)
        return code.upper()

    @field_validator("issue_date", "signature_date", mode="before")
    @classmethod
    def validate_dates(cls, v: Any) -> date:
        return parse_date(v, "Seal date")

    @field_validator("feature_definition", mode="before")
    @classmethod
    def validate_feature_definition(cls, v: Any) -> int:
        return _check_byte_value(v, "Feature definition reference (feature_definition)")

    @field_validator("type_category", mode="before")
    @classmethod
    def validate_type_category(cls, v: Any) -> int:
        return _check_byte_value(v, "Document type category (type_category)")

    @field_validator("features", mode="before")
    @classmethod
    def validate_features(cls, v: Any) -> dict[int, bytes]:
        if not isinstance(v, dict):
            msg = f"Features must be a mapping of tag to bytes, got {type(v).__name__}."
            raise FieldTypeError(msg)
        features = {}
        for tag, value in v.items():
            if isinstance(tag, bool) or not isinstance(tag, int) or not 0 <= tag <= 0xFF:
                msg = f"Feature tag {tag!r} must be an integer in the range 0-255."
                raise FieldRangeError(msg)
            features[tag] = as_bytes(value, f"Feature 0x{tag:02X}")
        return features

    @field_validator("signature_data", mode="before")
    @classmethod
    def validate_signature_data(cls, v: Any) -> bytes:
        return as_bytes(v, "Signature data (signature_data)")

    # Version-specific pieces

    @abstractmethod
    def _signer_field(self) -> bytes:
        """Encode signer identifier and certificate reference for the header."""

    @classmethod
    @abstractmethod
    def _parse_signer_field(cls, data: bytes, offset: int) -> tuple[str, str, int]:
        """Return identifier, certificate reference and the offset after them."""

    @classmethod
    @abstractmethod
    def _encode_feature_length(cls, tag: int, length: int) -> bytes:
        """Encode a message zone value length."""

    @classmethod
    @abstractmethod
    def _decode_feature_length(cls, data: bytes, offset: int) -> tuple[int, int]:
        """Return a message zone value length and the number of bytes it used."""

    # Encoding

    @property
    def header_zone(self) -> bytes:
        return (
            bytes([MAGIC, self.version])
            + c40_encode(pad(self.authority_code, 3))
            + self._signer_field()
            + date_to_bytes(self.issue_date)
            + date_to_bytes(self.signature_date)
            + bytes([self.feature_definition, self.type_category])
        )

    @property
    def message_zone(self) -> bytes:
        zone = bytearray()
        for tag, value in self.features.items():
            zone.append(tag)
            zone += self._encode_feature_length(tag, len(value))
            zone += value
        return bytes(zone)

    @property
    def signature_zone(self) -> bytes:
        return build_signature_zone(self.signature_data)

    @property
    def unsigned_seal(self) -> bytes:
        return self.header_zone + self.message_zone

    @property
    def signed_seal(self) -> bytes:
        return self.unsigned_seal + self.signature_zone

    def set_feature(self, tag: int, value: bytes) -> None:
        """Add or replace one feature, keeping the position of an existing tag."""
        self.features = {**self.features, tag: value}

    def remove_feature(self, tag: int) -> None:
        self.features = {key: value for key, value in self.features.items() if key != tag}

    def stub_sign(self) -> bytes:
        """Fill the signature with random bytes; no real signature scheme is applied."""
        self.signature_data = secrets.token_bytes(settings.signature_length)
        logger.debug("Stub-signed seal with %d random bytes", settings.signature_length)
        return self.signature_data

    # Decoding

    @classmethod
    def parse_header_zone(cls, data: bytes, offset: int = 0) -> tuple[dict[str, Any], int]:
        """
        Read a header zone starting at ``offset``.

        Returns:
            The header field values and the offset of the first byte after the header

        Raises:
            SealFormatError: If the magic or version byte is wrong
            FieldRangeError: If the data ends inside the header
        """
        magic, version = _take(data, offset, 2, "the seal magic and version")
        if magic != MAGIC:
            msg = f"Value '{magic:02X}' does not match the digital seal magic ({MAGIC:02X})"
            raise SealFormatError(msg)
        if version != cls.version:
            msg = f"Seal version byte '{version:02X}' does not match {cls.__name__} ({cls.version:02X})"
            raise SealFormatError(msg)
        offset += 2
        authority = c40_decode(_take(data, offset, AUTHORITY_C40_LENGTH, "the issuing authority"))
        offset += AUTHORITY_C40_LENGTH
        identifier, cert_reference, offset = cls._parse_signer_field(data, offset)
        issue_date = bytes_to_date(_take(data, offset, DATE_FIELD_LENGTH, "the issue date"))
        offset += DATE_FIELD_LENGTH
        signature_date = bytes_to_date(_take(data, offset, DATE_FIELD_LENGTH, "the signature date"))
        offset += DATE_FIELD_LENGTH
        feature_definition, type_category = _take(data, offset, 2, "the feature definition and type category")
        offset += 2
        values = {
            "authority_code": mrz_to_text(authority),
            "identifier_code": identifier,
            "cert_reference": cert_reference,
            "issue_date": issue_date,
            "signature_date": signature_date,
            "feature_definition": feature_definition,
            "type_category": type_category,
        }
        return values, offset

    @classmethod
    def parse_message_zone(
        cls, data: bytes, offset: int = 0, stop_at_signature: bool = False
    ) -> tuple[dict[int, bytes], int]:
        """
        Read features until the end of ``data``, or until the signature marker
        when ``stop_at_signature`` is set.

        Raises:
            FieldRangeError: If a declared feature length runs past the data
        """
        features: dict[int, bytes] = {}
        while offset < len(data):
            tag = data[offset]
            if stop_at_signature and tag == SIGNATURE_MARKER:
                break
            length, size = cls._decode_feature_length(data, offset + 1)
            offset += 1 + size
            value = bytes(data[offset : offset + length])
            if len(value) != length:
                msg = (
                    f"Feature 0x{tag:02X} declares {length} bytes but only "
                    f"{len(value)} remain in the message zone"
                )
                raise FieldRangeError(msg)
            features[tag] = value
            offset += length
        return features, offset

    @classmethod
    def decode(cls, data: bytes, signed: bool = True) -> dict[str, Any]:
        """Parse a whole unsigned or signed seal into field values."""
        values, offset = cls.parse_header_zone(data)
        features, offset = cls.parse_message_zone(data, offset, stop_at_signature=signed)
        values["features"] = features
        if signed:
            values["signature_data"] = extract_signature(data, offset)
        return values

    @classmethod
    def from_unsigned_seal(cls, data: bytes) -> DigitalSeal:
        """Build a new seal from unsigned seal bytes; the signature keeps its default."""
        return cls(**cls.decode(data, signed=False))

    @classmethod
    def from_signed_seal(cls, data: bytes) -> DigitalSeal:
        """Build a new seal from signed seal bytes."""
        return cls(**cls.decode(data, signed=True))

    def load_header_zone(self, data: bytes) -> None:
        values, offset = self.parse_header_zone(data)
        if offset != len(data):
            msg = f"Header zone has {len(data) - offset} unexpected trailing bytes"
            raise FieldRangeError(msg)
        self.apply(**values)

    def load_message_zone(self, data: bytes) -> None:
        features, _ = self.parse_message_zone(data)
        self.apply(features=features)

    def load_signature_zone(self, data: bytes) -> None:
        self.apply(signature_data=extract_signature(data))

    def load_unsigned_seal(self, data: bytes) -> None:
        self.apply(**self.decode(data, signed=False))

    def load_signed_seal(self, data: bytes) -> None:
        self.apply(**self.decode(data, signed=True))


class DigitalSealV3(DigitalSeal):
    """
    Version 3 seal (version byte 0x02).

    The certificate reference is exactly five hex characters and feature
    lengths are single bytes.
    """

    version: ClassVar[int] = VERSION_3

    @field_validator("cert_reference", mode="before")
    @classmethod
    def validate_cert_reference(cls, v: Any) -> str:
        reference = as_text(v, "Certificate reference (cert_reference)")
        errors = validate_hex_string(
            reference, minimum=V3_CERT_REFERENCE_LENGTH, maximum=V3_CERT_REFERENCE_LENGTH
        )
        if errors:
            msg = f"Value set on 'cert_reference' has errors: {describe_errors(errors)}"
            raise FieldRangeError(msg)
        return reference.upper()

    def _signer_field(self) -> bytes:
        return c40_encode(self.identifier_code + self.cert_reference)

    @classmethod
    def _parse_signer_field(cls, data: bytes, offset: int) -> tuple[str, str, int]:
        # 9 characters: three C40 triplets
        text = c40_decode(_take(data, offset, 6, "the signer and certificate reference"))
        return text[:IDENTIFIER_LENGTH], text[IDENTIFIER_LENGTH:], offset + 6

    @classmethod
    def _encode_feature_length(cls, tag: int, length: int) -> bytes:
        if length > MAX_V3_FEATURE_LENGTH:
            msg = f"Feature 0x{tag:02X} is {length} bytes; version 3 seals allow at most {MAX_V3_FEATURE_LENGTH}"
            raise FieldRangeError(msg)
        return bytes([length])

    @classmethod
    def _decode_feature_length(cls, data: bytes, offset: int) -> tuple[int, int]:
        return _take(data, offset, 1, "a feature length")[0], 1


class DigitalSealV4(DigitalSeal):
    """
    Version 4 seal (version byte 0x03).

    The signer field carries the identifier, the certificate reference length
    as two hex digits, then the reference itself. Feature lengths use DER
    definite-length encoding.
    """

    version: ClassVar[int] = VERSION_4

    @field_validator("cert_reference", mode="before")
    @classmethod
    def validate_cert_reference(cls, v: Any) -> str:
        reference = as_text(v, "Certificate reference (cert_reference)")
        errors = validate_hex_string(reference, minimum=1, maximum=MAX_V4_CERT_REFERENCE_LENGTH)
        if errors:
            msg = f"Value set on 'cert_reference' has errors: {describe_errors(errors)}"
            raise FieldRangeError(msg)
        return reference.upper()

    def _signer_field(self) -> bytes:
        return c40_encode(f"{self.identifier_code}{len(self.cert_reference):02X}{self.cert_reference}")

    @classmethod
    def _parse_signer_field(cls, data: bytes, offset: int) -> tuple[str, str, int]:
        # Identifier and two-digit length fill exactly two C40 triplets
        prefix = c40_decode(_take(data, offset, 4, "the signer identifier"))
        offset += 4
        try:
            length = int(prefix[IDENTIFIER_LENGTH:], 16)
        except ValueError:
            msg = f"Certificate reference length '{prefix[IDENTIFIER_LENGTH:]}' is not hexadecimal"
            raise SealFormatError(msg) from None
        size = 2 * -(-length // 3)
        reference = c40_decode(_take(data, offset, size, "the certificate reference"))
        return prefix[:IDENTIFIER_LENGTH], reference, offset + size

    @classmethod
    def _encode_feature_length(cls, tag: int, length: int) -> bytes:
        return length_to_der_length(length)

    @classmethod
    def _decode_feature_length(cls, data: bytes, offset: int) -> tuple[int, int]:
        first = _take(data, offset, 1, "a feature length")[0]
        size = der_length_size(first)
        return der_length_to_length(_take(data, offset, size, "a feature length")), size
