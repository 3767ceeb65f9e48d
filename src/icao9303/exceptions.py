"""
Exception hierarchy for the ICAO 9303 encoding core.

Validation errors are raised when a field is assigned; format errors are
raised while parsing an MRZ or decoding a seal. Range-class errors derive from
``ValueError`` and type-class errors from ``TypeError`` so callers can catch
either the package base class or the builtin.
"""

from __future__ import annotations


class ICAO9303Error(Exception):
    """Base exception for ICAO 9303 document and seal errors."""


class FieldRangeError(ICAO9303Error, ValueError):
    """A value is too long, too short or outside its allowed range."""


class FieldTypeError(ICAO9303Error, TypeError):
    """A value is not of the kind a field accepts."""


class InvalidDateError(FieldTypeError):
    """A value could not be read as a calendar date."""


class LineLengthError(FieldRangeError):
    """An MRZ has the wrong number of lines or a line has the wrong length."""

    def __init__(self, message: str, expected: int, actual: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class DerLengthError(FieldRangeError):
    """A DER definite length does not fit in four length octets."""


class C40EncodingError(FieldTypeError):
    """A character cannot be represented in C40."""


class C40ValueError(FieldRangeError):
    """A decoded C40 or DataMatrix ASCII value is outside the valid set."""


class SealFormatError(FieldTypeError):
    """Bytes do not start with the digital seal magic or the expected version."""


class SignatureMarkerError(FieldTypeError):
    """The signature zone does not start with the signature marker."""


class CheckDigitError(ICAO9303Error, ValueError):
    """An embedded check digit does not match the data it protects."""

    def __init__(self, field: str, data: str, expected: str, actual: str) -> None:
        message = (
            f"Invalid {field} check digit: '{actual}' does not match "
            f"'{expected}' computed for '{data}'"
        )
        super().__init__(message)
        self.field = field
        self.data = data
        self.expected = expected
        self.actual = actual
