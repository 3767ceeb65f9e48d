"""
MRZ composition and parsing for each ICAO Doc 9303 document size.

- TD1 (ID card): 3 lines of 30 characters
- TD2 (ID card): 2 lines of 36 characters
- TD3 (passport): 2 lines of 44 characters
- MRV-A (visa): 2 lines of 44 characters
- MRV-B (visa): 2 lines of 36 characters

Composers are stateless. ``compose`` turns a DocumentFieldSet into MRZ lines;
``parse`` checks line count, line lengths and every embedded check digit
before building a new DocumentFieldSet, so a failed parse produces nothing.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from ..exceptions import LineLengthError
from ..models.fields import DocumentFieldSet
from ..utils.check_digit import compute_check_digit, verify_check_digit
from ..utils.mrz_string import (
    FILLER,
    date_to_mrz,
    gender_to_mrz,
    mrz_to_date,
    mrz_to_gender,
    mrz_to_name,
    mrz_to_text,
    name_to_mrz,
    optional_data_to_mrz,
    pad,
)

logger = logging.getLogger(__name__)

NUMBER_WIDTH = 9
UNKNOWN_NATIONALITY = "XXX"


class DocumentFormat(str, Enum):
    """MRZ document sizes according to Doc 9303."""

    TD1 = "TD1"
    TD2 = "TD2"
    TD3 = "TD3"
    MRV_A = "MRV-A"
    MRV_B = "MRV-B"


@dataclass(frozen=True)
class MRZLayout:
    """Fixed dimensions of one document size."""

    document_format: DocumentFormat
    line_count: int
    line_length: int
    name_width: int
    optional_width: int

    @property
    def total_length(self) -> int:
        return self.line_count * self.line_length


class BaseMRZComposer(ABC):
    """Abstract base class for MRZ composition and parsing."""

    layout: ClassVar[MRZLayout]

    def compose(self, fields: DocumentFieldSet, number: str | None = None) -> list[str]:
        """
        Compose the MRZ lines for ``fields``.

        Args:
            fields: Validated identity fields
            number: Value for the document number position; defaults to
                ``fields.number`` (visas may print the passport number instead)

        Returns:
            The MRZ lines, each exactly ``layout.line_length`` characters
        """
        lines = self._compose_lines(fields, fields.number if number is None else number)
        self.check_lines(lines)
        return lines

    def parse(self, mrz: str | Sequence[str]) -> DocumentFieldSet:
        """
        Parse MRZ text into a new DocumentFieldSet.

        Args:
            mrz: The lines as a sequence, a newline-separated string, or the
                lines concatenated without separators

        Raises:
            LineLengthError: If the line count or any line length is wrong
            CheckDigitError: If any embedded check digit does not match
            InvalidDateError: If a date position does not hold a valid date
        """
        return DocumentFieldSet(**self.parse_values(mrz))

    def parse_values(self, mrz: str | Sequence[str]) -> dict[str, Any]:
        """Check ``mrz`` and return the field values it carries without building a field set."""
        lines = self.split_lines(mrz)
        self.check_lines(lines)
        values = self._parse_lines(lines)
        logger.debug("Parsed %s MRZ for document %s", self.layout.document_format.value, values["number"])
        return values

    def split_lines(self, mrz: str | Sequence[str]) -> list[str]:
        """Normalize the accepted MRZ input shapes to a list of lines."""
        if not isinstance(mrz, str):
            return list(mrz)
        if "\n" in mrz:
            return mrz.strip().splitlines()
        if len(mrz) != self.layout.total_length:
            msg = (
                f"{self.layout.document_format.value} MRZ must be {self.layout.total_length} "
                f"characters, got {len(mrz)}"
            )
            raise LineLengthError(msg, self.layout.total_length, len(mrz))
        step = self.layout.line_length
        return [mrz[i : i + step] for i in range(0, len(mrz), step)]

    def check_lines(self, lines: Sequence[str]) -> None:
        """Raise LineLengthError unless ``lines`` has the layout's shape."""
        layout = self.layout
        if len(lines) != layout.line_count:
            msg = f"{layout.document_format.value} MRZ must have {layout.line_count} lines, got {len(lines)}"
            raise LineLengthError(msg, layout.line_count, len(lines))
        for i, line in enumerate(lines, start=1):
            self.check_line(line, i)

    def check_line(self, line: str, line_number: int) -> None:
        """Raise LineLengthError unless one line has the layout's length."""
        if len(line) != self.layout.line_length:
            msg = (
                f"{self.layout.document_format.value} MRZ line {line_number} must be "
                f"{self.layout.line_length} characters, got {len(line)}"
            )
            raise LineLengthError(msg, self.layout.line_length, len(line))

    @abstractmethod
    def _compose_lines(self, fields: DocumentFieldSet, number: str) -> list[str]:
        """Build the lines for this document size."""

    @abstractmethod
    def _parse_lines(self, lines: list[str]) -> dict[str, Any]:
        """Validate check digits and return field values."""

    # Building blocks shared by the 2-line formats

    def _name_line(self, fields: DocumentFieldSet) -> str:
        return (
            pad(fields.type_code, 2)
            + fields.authority_code
            + name_to_mrz(fields.full_name, self.layout.name_width)
        )

    @staticmethod
    def _document_line_prefix(fields: DocumentFieldSet, number: str) -> str:
        """Number, nationality, birth, gender and expiry with their check digits (28 chars)."""
        number_field = pad(number, NUMBER_WIDTH)
        birth = date_to_mrz(fields.birth_date)
        expiry = date_to_mrz(fields.expiration_date)
        return (
            number_field
            + compute_check_digit(number_field)
            + fields.nationality_code
            + birth
            + compute_check_digit(birth)
            + gender_to_mrz(fields.gender_marker)
            + expiry
            + compute_check_digit(expiry)
        )

    @staticmethod
    def _parse_name_line(line: str) -> dict[str, Any]:
        return {
            "type_code": mrz_to_text(line[0:2]),
            "authority_code": line[2:5],
            "full_name": mrz_to_name(line[5:]),
        }

    @staticmethod
    def _verify_document_line_prefix(line: str) -> None:
        verify_check_digit(line[0:9], line[9], "document number")
        verify_check_digit(line[13:19], line[19], "date of birth")
        verify_check_digit(line[21:27], line[27], "date of expiry")

    @staticmethod
    def _parse_document_line_prefix(line: str) -> dict[str, Any]:
        return {
            "number": mrz_to_text(line[0:9]),
            "nationality_code": line[10:13],
            "birth_date": mrz_to_date(line[13:19]),
            "gender_marker": mrz_to_gender(line[20]),
            "expiration_date": mrz_to_date(line[21:27], expiry=True),
        }


class TD1Composer(BaseMRZComposer):
    """MRZ composer for TD1 cards according to Doc 9303 Part 5."""

    layout = MRZLayout(DocumentFormat.TD1, line_count=3, line_length=30, name_width=30, optional_width=26)

    def _compose_lines(self, fields: DocumentFieldSet, number: str) -> list[str]:
        """
        Line 1: type, authority, number + check, optional data 1-15
        Line 2: birth + check, gender, expiry + check, nationality,
                optional data 16-26, composite check
        Line 3: name
        """
        optional = optional_data_to_mrz(fields.optional_data, self.layout.optional_width)
        number_field = pad(number, NUMBER_WIDTH)
        line1 = (
            pad(fields.type_code, 2)
            + fields.authority_code
            + number_field
            + compute_check_digit(number_field)
            + optional[:15]
        )
        birth = date_to_mrz(fields.birth_date)
        expiry = date_to_mrz(fields.expiration_date)
        unchecked = (
            birth
            + compute_check_digit(birth)
            + gender_to_mrz(fields.gender_marker)
            + expiry
            + compute_check_digit(expiry)
            + fields.nationality_code
            + optional[15:]
        )
        composite = compute_check_digit(line1[5:] + unchecked[0:7] + unchecked[8:15] + unchecked[18:])
        line3 = name_to_mrz(fields.full_name, self.layout.name_width)
        return [line1, unchecked + composite, line3]

    def _parse_lines(self, lines: list[str]) -> dict[str, Any]:
        line1, line2, line3 = lines
        verify_check_digit(line1[5:14], line1[14], "document number")
        verify_check_digit(line2[0:6], line2[6], "date of birth")
        verify_check_digit(line2[8:14], line2[14], "date of expiry")
        verify_check_digit(
            line1[5:] + line2[0:7] + line2[8:15] + line2[18:29], line2[29], "composite"
        )
        return {
            "type_code": mrz_to_text(line1[0:2]),
            "authority_code": line1[2:5],
            "number": mrz_to_text(line1[5:14]),
            "birth_date": mrz_to_date(line2[0:6]),
            "gender_marker": mrz_to_gender(line2[7]),
            "expiration_date": mrz_to_date(line2[8:14], expiry=True),
            "nationality_code": line2[15:18],
            "optional_data": mrz_to_text(line1[15:30] + line2[18:29]),
            "full_name": mrz_to_name(line3),
        }


class CrewIDComposer(TD1Composer):
    """
    TD1 variant for crew identity cards.

    Line 2 carries no holder data besides the expiry: the birth date is all
    fillers, the gender a filler and the nationality ``XXX``. Parsing returns
    no birth date, gender or nationality.
    """

    def _compose_lines(self, fields: DocumentFieldSet, number: str) -> list[str]:
        line1, _, line3 = super()._compose_lines(fields, number)
        optional = optional_data_to_mrz(fields.optional_data, self.layout.optional_width)
        no_birth = FILLER * 6
        expiry = date_to_mrz(fields.expiration_date)
        unchecked = (
            no_birth
            + compute_check_digit(no_birth)
            + FILLER
            + expiry
            + compute_check_digit(expiry)
            + UNKNOWN_NATIONALITY
            + optional[15:]
        )
        composite = compute_check_digit(line1[5:] + unchecked[0:7] + unchecked[8:15] + unchecked[18:])
        return [line1, unchecked + composite, line3]

    def _parse_lines(self, lines: list[str]) -> dict[str, Any]:
        line1, line2, line3 = lines
        verify_check_digit(line1[5:14], line1[14], "document number")
        verify_check_digit(line2[8:14], line2[14], "date of expiry")
        verify_check_digit(
            line1[5:] + line2[0:7] + line2[8:15] + line2[18:29], line2[29], "composite"
        )
        return {
            "type_code": mrz_to_text(line1[0:2]),
            "authority_code": line1[2:5],
            "number": mrz_to_text(line1[5:14]),
            "expiration_date": mrz_to_date(line2[8:14], expiry=True),
            "optional_data": mrz_to_text(line1[15:30] + line2[18:29]),
            "full_name": mrz_to_name(line3),
        }


class TD2Composer(BaseMRZComposer):
    """MRZ composer for TD2 cards according to Doc 9303 Part 6."""

    layout = MRZLayout(DocumentFormat.TD2, line_count=2, line_length=36, name_width=31, optional_width=7)

    def _compose_lines(self, fields: DocumentFieldSet, number: str) -> list[str]:
        unchecked = self._document_line_prefix(fields, number) + optional_data_to_mrz(
            fields.optional_data, self.layout.optional_width
        )
        composite = compute_check_digit(unchecked[0:10] + unchecked[13:20] + unchecked[21:35])
        return [self._name_line(fields), unchecked + composite]

    def _parse_lines(self, lines: list[str]) -> dict[str, Any]:
        line1, line2 = lines
        self._verify_document_line_prefix(line2)
        verify_check_digit(line2[0:10] + line2[13:20] + line2[21:35], line2[35], "composite")
        return {
            **self._parse_name_line(line1),
            **self._parse_document_line_prefix(line2),
            "optional_data": mrz_to_text(line2[28:35]),
        }


class TD3Composer(BaseMRZComposer):
    """MRZ composer for TD3 passports according to Doc 9303 Part 4."""

    layout = MRZLayout(DocumentFormat.TD3, line_count=2, line_length=44, name_width=39, optional_width=14)

    def _compose_lines(self, fields: DocumentFieldSet, number: str) -> list[str]:
        """
        Line 1: type, authority, name
        Line 2: number + check, nationality, birth + check, gender,
                expiry + check, optional data + check, composite check
        """
        optional = optional_data_to_mrz(fields.optional_data, self.layout.optional_width)
        optional_check = compute_check_digit(optional)
        # An empty optional data field carries a filler instead of its check digit
        if optional == FILLER * self.layout.optional_width and optional_check == "0":
            optional_check = FILLER
        unchecked = self._document_line_prefix(fields, number) + optional + optional_check
        composite = compute_check_digit(unchecked[0:10] + unchecked[13:20] + unchecked[21:43])
        return [self._name_line(fields), unchecked + composite]

    def _parse_lines(self, lines: list[str]) -> dict[str, Any]:
        line1, line2 = lines
        self._verify_document_line_prefix(line2)
        optional = line2[28:42]
        optional_check = line2[42]
        # A filler may stand in for a zero check digit
        if not (optional_check == FILLER and compute_check_digit(optional) == "0"):
            verify_check_digit(optional, optional_check, "optional data")
        verify_check_digit(line2[0:10] + line2[13:20] + line2[21:43], line2[43], "composite")
        return {
            **self._parse_name_line(line1),
            **self._parse_document_line_prefix(line2),
            "optional_data": mrz_to_text(optional),
        }


class MRVAComposer(BaseMRZComposer):
    """MRZ composer for Type A visas according to Doc 9303 Part 7."""

    layout = MRZLayout(DocumentFormat.MRV_A, line_count=2, line_length=44, name_width=39, optional_width=16)

    def _compose_lines(self, fields: DocumentFieldSet, number: str) -> list[str]:
        line2 = self._document_line_prefix(fields, number) + optional_data_to_mrz(
            fields.optional_data, self.layout.optional_width
        )
        return [self._name_line(fields), line2]

    def _parse_lines(self, lines: list[str]) -> dict[str, Any]:
        line1, line2 = lines
        self._verify_document_line_prefix(line2)
        return {
            **self._parse_name_line(line1),
            **self._parse_document_line_prefix(line2),
            "optional_data": mrz_to_text(line2[28:]),
        }


class MRVBComposer(MRVAComposer):
    """MRZ composer for Type B visas according to Doc 9303 Part 7."""

    layout = MRZLayout(DocumentFormat.MRV_B, line_count=2, line_length=36, name_width=31, optional_width=8)


class MRZComposerFactory:
    """Factory for creating appropriate MRZ composers."""

    _composers: ClassVar[dict[DocumentFormat, type[BaseMRZComposer]]] = {
        DocumentFormat.TD1: TD1Composer,
        DocumentFormat.TD2: TD2Composer,
        DocumentFormat.TD3: TD3Composer,
        DocumentFormat.MRV_A: MRVAComposer,
        DocumentFormat.MRV_B: MRVBComposer,
    }

    @classmethod
    def create_composer(cls, document_format: DocumentFormat | str) -> BaseMRZComposer:
        """Create the composer for a document format."""
        try:
            composer_class = cls._composers[DocumentFormat(document_format)]
        except (KeyError, ValueError):
            msg = f"No MRZ composer available for document format: {document_format}"
            raise ValueError(msg) from None
        return composer_class()

    @classmethod
    def get_supported_formats(cls) -> list[DocumentFormat]:
        return list(cls._composers.keys())


def compose_mrz(
    document_format: DocumentFormat | str, fields: DocumentFieldSet, number: str | None = None
) -> list[str]:
    """
    Convenience function to compose the MRZ of any supported document format.

    Args:
        document_format: Size of the document
        fields: Identity fields
        number: Optional override for the document number position

    Returns:
        The MRZ lines
    """
    return MRZComposerFactory.create_composer(document_format).compose(fields, number)


def parse_mrz(document_format: DocumentFormat | str, mrz: str | Sequence[str]) -> DocumentFieldSet:
    """Convenience function to parse the MRZ of any supported document format."""
    return MRZComposerFactory.create_composer(document_format).parse(mrz)
