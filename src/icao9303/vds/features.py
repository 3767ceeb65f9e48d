"""
Codecs for individual seal features.

The MRZ-carrying feature holds a C40 encoding of selected MRZ slices. Seals
are read back into document fields only after every embedded check digit has
been verified against the decoded text.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..codecs.c40 import c40_decode, c40_encode
from ..exceptions import FieldRangeError, FieldTypeError, LineLengthError
from ..mrz.composers import DocumentFormat
from ..utils.check_digit import verify_check_digit
from ..utils.mrz_string import FILLER, mrz_to_date, mrz_to_gender, mrz_to_name, mrz_to_text
from ..utils.validators import describe_errors, validate_hex_string
from .constants import TAG_MRZ_CREW, TAG_MRZ_MRVA, TAG_MRZ_MRVB, TAG_MRZ_PASSPORT

logger = logging.getLogger(__name__)

MAX_ENTRIES = 254
MAX_DURATION_VALUE = 254
HEX_CODE_LENGTH = 8
MULTIPLE_ENTRIES = "MULTIPLE"


def encode_entries(value: int | str) -> bytes:
    """
    Encode the number of entries as one byte; 0 means unlimited.

    Any non-numeric text, such as ``"Multiple"``, is unlimited as well.
    """
    if isinstance(value, bool):
        msg = "Number of entries must be a number or text, got bool."
        raise FieldTypeError(msg)
    if isinstance(value, int):
        count = value
    else:
        text = str(value).strip()
        count = int(text) if text.isdigit() else 0
    if not 0 <= count <= MAX_ENTRIES:
        msg = f"Number of entries must be in the range 0-{MAX_ENTRIES}, got {count}."
        raise FieldRangeError(msg)
    return bytes([count])


def decode_entries(data: bytes) -> int | str:
    if len(data) != 1:
        msg = f"Number of entries feature must be 1 byte, got {len(data)}"
        raise FieldRangeError(msg)
    return MULTIPLE_ENTRIES if data[0] == 0 else data[0]


def validate_duration_of_stay(value: Sequence[int]) -> bytes:
    """
    Check a ``[days, months, years]`` duration and return its feature bytes.

    Raises:
        FieldTypeError: If the value is not a sequence of integers
        FieldRangeError: If it does not have three parts or a part is outside 0-254
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        msg = f"Duration of stay must be a [days, months, years] sequence, got {type(value).__name__}."
        raise FieldTypeError(msg)
    if len(value) != 3:
        msg = f"Duration of stay must have 3 parts [days, months, years], got {len(value)}."
        raise FieldRangeError(msg)
    for label, part in zip(("Days", "Months", "Years"), value):
        if isinstance(part, bool) or not isinstance(part, int):
            msg = f"{label} of duration of stay must be an integer, got {type(part).__name__}."
            raise FieldTypeError(msg)
        if not 0 <= part <= MAX_DURATION_VALUE:
            msg = f"{label} of duration of stay must be in the range 0-{MAX_DURATION_VALUE}, got {part}."
            raise FieldRangeError(msg)
    return bytes(value)


def decode_duration_of_stay(data: bytes) -> list[int]:
    if len(data) != 3:
        msg = f"Duration of stay feature must be 3 bytes, got {len(data)}"
        raise FieldRangeError(msg)
    return list(data)


def encode_hex_code(code: str, label: str = "Hex code") -> bytes:
    """
    Encode a hex string of up to eight characters.

    The code is left-padded to eight characters and leading ``00`` pairs are
    dropped, always keeping the final pair.

    Example:
        >>> encode_hex_code("0").hex()
        '00'
        >>> encode_hex_code("1A2B").hex()
        '1a2b'
    """
    if not isinstance(code, str):
        msg = f"{label} must be a string, got {type(code).__name__}."
        raise FieldTypeError(msg)
    errors = validate_hex_string(code, minimum=1, maximum=HEX_CODE_LENGTH)
    if errors:
        msg = f"{label} has errors: {describe_errors(errors)}"
        raise FieldRangeError(msg)
    padded = code.upper().zfill(HEX_CODE_LENGTH)
    pairs = [padded[i : i + 2] for i in range(0, HEX_CODE_LENGTH, 2)]
    while len(pairs) > 1 and pairs[0] == "00":
        pairs.pop(0)
    return bytes.fromhex("".join(pairs))


def decode_hex_code(data: bytes) -> str:
    return bytes(data).hex().upper()


@dataclass(frozen=True)
class SealMRZLayout:
    """
    Where the MRZ-carrying feature takes its text from, and where each field
    sits inside the decoded text. Every check digit follows its field.

    Layouts without a birth slice carry no birth date, gender or nationality.
    """

    document_format: DocumentFormat
    tag: int
    segments: tuple[tuple[int, slice], ...]
    length: int
    name: slice
    number: slice
    expiry: slice
    nationality: slice | None = None
    birth: slice | None = None
    gender: int | None = None


MRVA_SEAL_LAYOUT = SealMRZLayout(
    document_format=DocumentFormat.MRV_A,
    tag=TAG_MRZ_MRVA,
    segments=((0, slice(0, 44)), (1, slice(0, 28))),
    length=72,
    name=slice(5, 44),
    number=slice(44, 53),
    nationality=slice(54, 57),
    birth=slice(57, 63),
    gender=64,
    expiry=slice(65, 71),
)

MRVB_SEAL_LAYOUT = SealMRZLayout(
    document_format=DocumentFormat.MRV_B,
    tag=TAG_MRZ_MRVB,
    segments=((0, slice(0, 36)), (1, slice(0, 28))),
    length=64,
    name=slice(5, 36),
    number=slice(36, 45),
    nationality=slice(46, 49),
    birth=slice(49, 55),
    gender=56,
    expiry=slice(57, 63),
)

PASSPORT_SEAL_LAYOUT = SealMRZLayout(
    document_format=DocumentFormat.TD3,
    tag=TAG_MRZ_PASSPORT,
    segments=((0, slice(0, 44)), (1, slice(0, 28))),
    length=72,
    name=slice(5, 44),
    number=slice(44, 53),
    nationality=slice(54, 57),
    birth=slice(57, 63),
    gender=64,
    expiry=slice(65, 71),
)

CREW_SEAL_LAYOUT = SealMRZLayout(
    document_format=DocumentFormat.TD1,
    tag=TAG_MRZ_CREW,
    segments=((0, slice(0, 15)), (1, slice(0, 18)), (2, slice(0, 30))),
    length=63,
    name=slice(33, 63),
    number=slice(5, 14),
    nationality=slice(30, 33),
    birth=slice(15, 21),
    gender=22,
    expiry=slice(23, 29),
)

CREW_ID_SEAL_LAYOUT = SealMRZLayout(
    document_format=DocumentFormat.TD1,
    tag=TAG_MRZ_CREW,
    segments=((0, slice(0, 15)), (1, slice(0, 18)), (2, slice(0, 30))),
    length=63,
    name=slice(33, 63),
    number=slice(5, 14),
    expiry=slice(23, 29),
)


def seal_mrz_text(layout: SealMRZLayout, lines: Sequence[str]) -> str:
    """Join the MRZ slices a seal carries for ``layout``."""
    text = "".join(lines[index][part] for index, part in layout.segments)
    if len(text) != layout.length:
        msg = (
            f"{layout.document_format.value} seal MRZ text must be {layout.length} "
            f"characters, got {len(text)}"
        )
        raise LineLengthError(msg, layout.length, len(text))
    return text


def derive_seal_feature(layout: SealMRZLayout, lines: Sequence[str]) -> bytes:
    """C40-encode the MRZ slices carried by a seal."""
    return c40_encode(seal_mrz_text(layout, lines))


def derive_fields(layout: SealMRZLayout, feature: bytes) -> dict[str, Any]:
    """
    Decode the MRZ-carrying feature into DocumentFieldSet values.

    Every check digit is verified before any value is produced, so a failure
    leaves nothing half-decoded.

    Raises:
        LineLengthError: If the decoded text has the wrong length
        CheckDigitError: If an embedded check digit does not match
    """
    # C40 decodes fillers as spaces
    text = c40_decode(feature).replace(" ", FILLER)
    if len(text) != layout.length:
        msg = (
            f"{layout.document_format.value} seal MRZ feature must decode to {layout.length} "
            f"characters, got {len(text)}"
        )
        raise LineLengthError(msg, layout.length, len(text))

    checked = [("document number", layout.number), ("date of expiry", layout.expiry)]
    if layout.birth is not None:
        checked.insert(1, ("date of birth", layout.birth))
    for label, part in checked:
        verify_check_digit(text[part], text[part.stop], label)

    values: dict[str, Any] = {
        "type_code": mrz_to_text(text[0:2]),
        "authority_code": text[2:5],
        "full_name": mrz_to_name(text[layout.name]),
        "number": mrz_to_text(text[layout.number]),
        "expiration_date": mrz_to_date(text[layout.expiry], expiry=True),
    }
    if layout.birth is not None:
        values["nationality_code"] = text[layout.nationality]
        values["birth_date"] = mrz_to_date(text[layout.birth])
        values["gender_marker"] = mrz_to_gender(text[layout.gender])
    return values
