"""
ICAO 9303 encoding core.

MRZ composition and parsing with check digits for TD1, TD2, TD3, MRV-A and
MRV-B documents, and visible digital seal encoding with its C40 and DER
length codecs.
"""

from __future__ import annotations

from .codecs import (
    bytes_to_date,
    c40_decode,
    c40_encode,
    date_to_bytes,
    der_length_to_length,
    extract_signature,
    length_to_der_length,
)
from .config import ConfigurationError, Settings, configure, settings
from .documents import (
    CrewCertificate,
    CrewID,
    CrewLicense,
    MRVADocument,
    MRVBDocument,
    SealedPassport,
    TD1Document,
    TD2Document,
    TD3Document,
)
from .exceptions import (
    C40EncodingError,
    C40ValueError,
    CheckDigitError,
    DerLengthError,
    FieldRangeError,
    FieldTypeError,
    ICAO9303Error,
    InvalidDateError,
    LineLengthError,
    SealFormatError,
    SignatureMarkerError,
)
from .models import CrewFields, DocumentFieldSet, Gender, VisaFields
from .mrz import DocumentFormat, MRZComposerFactory, compose_mrz, parse_mrz
from .utils import compute_check_digit, verify_check_digit
from .vds import (
    DigitalSealV3,
    DigitalSealV4,
    decode_barcode_payload,
    derive_fields,
    derive_seal_feature,
    encode_barcode_payload,
)

__version__ = "0.1.0"

__all__ = [
    "C40EncodingError",
    "C40ValueError",
    "CheckDigitError",
    "ConfigurationError",
    "CrewCertificate",
    "CrewFields",
    "CrewID",
    "CrewLicense",
    "DerLengthError",
    "DigitalSealV3",
    "DigitalSealV4",
    "DocumentFieldSet",
    "DocumentFormat",
    "FieldRangeError",
    "FieldTypeError",
    "Gender",
    "ICAO9303Error",
    "InvalidDateError",
    "LineLengthError",
    "MRVADocument",
    "MRVBDocument",
    "MRZComposerFactory",
    "SealFormatError",
    "SealedPassport",
    "Settings",
    "SignatureMarkerError",
    "TD1Document",
    "TD2Document",
    "TD3Document",
    "VisaFields",
    "bytes_to_date",
    "c40_decode",
    "c40_encode",
    "compose_mrz",
    "compute_check_digit",
    "configure",
    "date_to_bytes",
    "decode_barcode_payload",
    "der_length_to_length",
    "derive_fields",
    "derive_seal_feature",
    "encode_barcode_payload",
    "extract_signature",
    "length_to_der_length",
    "parse_mrz",
    "settings",
    "verify_check_digit",
]
