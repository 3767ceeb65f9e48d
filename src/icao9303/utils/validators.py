"""
Reusable string checks for MRZ and seal fields.

Each check returns a list of problems; an empty list means the value is valid.
Callers turn the list into an exception message with :func:`describe_errors`.
"""

from __future__ import annotations

import re

MRZ_INVALID_CHARACTERS = re.compile(r"[^A-Z0-9<\s]", re.IGNORECASE)
HEX_INVALID_CHARACTERS = re.compile(r"[^0-9A-F]", re.IGNORECASE)
LETTERS_ONLY = re.compile(r"^[A-Z]*$", re.IGNORECASE)
ALPHANUMERIC_ONLY = re.compile(r"^[A-Z0-9]*$", re.IGNORECASE)


def _length_errors(value: str, minimum: int | None, maximum: int | None) -> list[str]:
    errors = []
    if minimum is not None and len(value) < minimum:
        errors.append(f"length must be at least {minimum} character{'' if minimum == 1 else 's'}")
    if maximum is not None and len(value) > maximum:
        errors.append(f"length must not be more than {maximum} character{'' if maximum == 1 else 's'}")
    return errors


def validate_mrz_string(
    value: str, minimum: int | None = None, maximum: int | None = None
) -> list[str]:
    """Check that ``value`` only uses A-Z, 0-9, space or ``<`` and fits the bounds."""
    errors = _length_errors(value, minimum, maximum)
    if MRZ_INVALID_CHARACTERS.search(value):
        errors.append("must only use the characters A-Z, 0-9, ' ', or '<'")
    return errors


def validate_hex_string(
    value: str, minimum: int | None = None, maximum: int | None = None
) -> list[str]:
    """Check that ``value`` is a hexadecimal string within the bounds."""
    errors = _length_errors(value, minimum, maximum)
    if HEX_INVALID_CHARACTERS.search(value):
        errors.append("must only use the characters 0-9 or A-F")
    return errors


def validate_identifier_code(value: str) -> list[str]:
    """Check a seal signer identifier: two letters then two alphanumerics."""
    errors = []
    if len(value) != 4:
        errors.append("full identifier code must be 4 characters long")
    if not LETTERS_ONLY.match(value[:2]):
        errors.append("country code (characters 1-2) must use only characters A-Z")
    if not ALPHANUMERIC_ONLY.match(value[2:]):
        errors.append("signer code (characters 3-4) must use only characters A-Z or 0-9")
    return errors


def describe_errors(errors: list[str]) -> str:
    """
    Join problems into one sentence.

    Example:
        >>> describe_errors(["length must be at least 1 character", "must only use 0-9"])
        'Length must be at least 1 character; and must only use 0-9.'
    """
    if not errors:
        return ""
    parts = []
    for i, error in enumerate(errors):
        text = error[0].upper() + error[1:] if i == 0 else error
        if i == len(errors) - 1 and i > 0:
            text = f"and {text}"
        parts.append(text)
    return "; ".join(parts) + "."
