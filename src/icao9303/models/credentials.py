"""Display fields of sealed passports, crew ID cards and crew licenses."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import ValidationInfo, field_validator

from ..codecs.c40 import CHAR_TO_C40
from ..exceptions import FieldRangeError
from .base import FieldModel, as_text, parse_date


def check_c40_text(value: str, label: str) -> str:
    """Uppercase text that a seal feature carries as C40."""
    invalid = sorted({char for char in value if char.upper() not in CHAR_TO_C40})
    if invalid:
        msg = f"{label} can only hold 0-9, A-Z, space and '<', got {''.join(invalid)!r}."
        raise FieldRangeError(msg)
    return value.upper()


class IssuedFields(FieldModel):
    """Fields shared by every sealed credential; the issue date is the seal's."""

    url: str = ""
    issue_date: date

    @field_validator("issue_date", mode="before")
    @classmethod
    def validate_issue_date(cls, v: Any) -> date:
        return parse_date(v, "Date of issue (issue_date)")

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: Any) -> str:
        return as_text(v, "URL (url)")


class PassportSealFields(IssuedFields):
    """
    Fields of a passport with a seal.

    ``place_of_birth`` and ``endorsements`` are also seal features, so they
    are limited to the C40 alphabet and stored uppercased.
    """

    place_of_birth: str = "UTOPIA"
    subauthority: str = "Unknown"
    endorsements: str = "NONE"

    @field_validator("place_of_birth", "endorsements", mode="before")
    @classmethod
    def validate_feature_text(cls, v: Any, info: ValidationInfo) -> str:
        label = f"'{info.field_name}'"
        return check_c40_text(as_text(v, label), label)

    @field_validator("subauthority", mode="before")
    @classmethod
    def validate_subauthority(cls, v: Any) -> str:
        return as_text(v, "Subauthority (subauthority)")


class CrewIDFields(IssuedFields):
    employer: str = "Unknown"

    @field_validator("employer", mode="before")
    @classmethod
    def validate_employer(cls, v: Any) -> str:
        return as_text(v, "Employer (employer)")


class CrewLicenseFields(IssuedFields):
    """Fields of a crew member license."""

    authority: str = "Unknown"
    privilege: str = "Unknown"
    ratings: str = ""
    limitations: str = ""

    @field_validator("authority", "privilege", "ratings", "limitations", mode="before")
    @classmethod
    def validate_free_text(cls, v: Any) -> str:
        return as_text(v, "Free text field")
