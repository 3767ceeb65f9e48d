"""
MRZ string encoding helpers.

These are the projections from typed field values into fixed-width
Machine-Readable Zone text and into Visual Inspection Zone (VIZ) display
strings, plus their inverses used while parsing. Overlong names and optional
data are truncated with a logged warning, never rejected.
"""

from __future__ import annotations

import logging
import unicodedata
from datetime import date
from enum import Enum

from ..config import settings
from ..exceptions import InvalidDateError

logger = logging.getLogger(__name__)

FILLER = "<"

MONTH_ABBREVIATIONS = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)


def normalize(text: str) -> str:
    """
    Normalize free text into the MRZ character set.

    Diacritics are stripped after NFD decomposition, apostrophes and commas
    are removed, hyphens and spaces become fillers, and the result is
    uppercased.

    Example:
        >>> normalize("Anna-María O'Neill")
        'ANNA<MARIA<ONEILL'
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (
        stripped.replace("'", "")
        .replace("-", FILLER)
        .replace(" ", FILLER)
        .replace(",", "")
        .upper()
    )


def pad(text: str, length: int) -> str:
    """Right-pad ``text`` with fillers to ``length`` and uppercase it."""
    return text.ljust(length, FILLER).upper()


def _truncate(value: str, length: int, field_name: str) -> str:
    if len(value) > length:
        logger.warning("%s is longer than %d and will be truncated.", field_name, length)
    return value[:length]


def name_to_mrz(full_name: str, length: int) -> str:
    """
    Normalize and pad a holder's name for an MRZ name field of ``length``.

    Only the last ``/``-separated script variant is used; the first ``", "``
    separating the primary identifier becomes ``<<``.

    Example:
        >>> name_to_mrz("Millefeuille, Alfalfa", 30)
        'MILLEFEUILLE<<ALFALFA<<<<<<<<<'
    """
    latin_variant = full_name.split("/")[-1]
    normalized = normalize(latin_variant.replace(", ", "<<", 1))
    return pad(_truncate(normalized, length, "Name (full_name)"), length)


def optional_data_to_mrz(data: str, length: int) -> str:
    """Normalize and pad optional data for an MRZ optional data field."""
    normalized = normalize(data)
    return pad(_truncate(normalized, length, "Optional data (optional_data)"), length)


def date_to_mrz(value: date) -> str:
    """Format a date as ``YYMMDD``."""
    return f"{value.year % 100:02d}{value.month:02d}{value.day:02d}"


def date_to_viz(value: date) -> str:
    """Format a date as ``DD MMM YYYY`` for the visual zone, e.g. ``30 SEP 2023``."""
    return f"{value.day:02d} {MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def gender_to_mrz(marker: str) -> str:
    """Map the unspecified marker ``X`` to a filler."""
    return FILLER if marker == "X" else marker


def mrz_to_gender(char: str) -> str:
    """Map an MRZ (or C40-decoded) gender position back to ``F``, ``M`` or ``X``."""
    return "X" if char in (FILLER, " ") else char


def expand_year(two_digit_year: str, cutoff: int | None = None) -> int:
    """
    Expand a two-digit year.

    Years at or above the cutoff belong to the 1900s, the rest to the 2000s.
    """
    cutoff = settings.year_cutoff if cutoff is None else cutoff
    year = int(two_digit_year)
    return 1900 + year if year >= cutoff else 2000 + year


def mrz_to_date(value: str, cutoff: int | None = None, expiry: bool = False) -> date:
    """
    Parse an MRZ ``YYMMDD`` date.

    Expiry and valid-thru dates always fall in the 2000s; ``cutoff`` only
    applies to other dates such as the date of birth.
    """
    if len(value) != 6 or not value.isdigit():
        msg = f"MRZ date '{value}' must be 6 digits in YYMMDD format"
        raise InvalidDateError(msg)
    year = 2000 + int(value[:2]) if expiry else expand_year(value[:2], cutoff)
    try:
        return date(year, int(value[2:4]), int(value[4:6]))
    except ValueError as e:
        msg = f"MRZ date '{value}' is not a valid calendar date"
        raise InvalidDateError(msg) from e


def mrz_to_name(field: str) -> str:
    """Turn an MRZ name field back into ``"PRIMARY, SECONDARY NAMES"`` form."""
    return field.replace("<<", ", ", 1).replace(FILLER, " ").strip().rstrip(",")


def mrz_to_text(field: str) -> str:
    """Strip trailing fillers (or C40 spaces) from a fixed-width MRZ field."""
    return field.rstrip(FILLER + " ")


def to_viz(value: object) -> str:
    """Uppercase display projection of a field value for the visual zone."""
    if isinstance(value, date):
        return date_to_viz(value)
    if isinstance(value, Enum):
        value = value.value
    return str(value).upper()
