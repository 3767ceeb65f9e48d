"""Fields carried by machine-readable visas and crew member certificates."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import field_validator

from ..exceptions import FieldRangeError
from .base import FieldModel, as_text, check_mrz_text, parse_date

MAX_ENTRIES = 254


class VisaFields(FieldModel):
    """Visa-specific fields composed alongside a DocumentFieldSet."""

    place_of_issue: str
    valid_from: date
    number_of_entries: int | str = "Multiple"
    visa_type: str = ""
    additional_info: str = ""
    passport_number: str = ""
    use_passport_in_mrz: bool = False

    @field_validator("valid_from", mode="before")
    @classmethod
    def validate_valid_from(cls, v: Any) -> date:
        return parse_date(v, "Valid from (valid_from)")

    @field_validator("number_of_entries")
    @classmethod
    def validate_number_of_entries(cls, v: int | str) -> int | str:
        if isinstance(v, int) and not 0 <= v <= MAX_ENTRIES:
            msg = f"Number of entries (number_of_entries) must be in the range 0-{MAX_ENTRIES}."
            raise FieldRangeError(msg)
        return v

    @field_validator("passport_number", mode="before")
    @classmethod
    def validate_passport_number(cls, v: Any) -> str:
        return check_mrz_text(
            as_text(v, "Passport number (passport_number)"), "'passport_number'", maximum=9
        )

    @field_validator("place_of_issue", "visa_type", "additional_info", mode="before")
    @classmethod
    def validate_free_text(cls, v: Any) -> str:
        return as_text(v, "Free text field")


class CrewFields(FieldModel):
    """Display fields of a crew member certificate."""

    employer: str = "Unknown"
    occupation: str = "Unknown"
    declaration: str = ""
    place_of_issue: str = ""
    url: str = ""
    issue_date: date

    @field_validator("issue_date", mode="before")
    @classmethod
    def validate_issue_date(cls, v: Any) -> date:
        return parse_date(v, "Date of issue (issue_date)")

    @field_validator("employer", "occupation", "declaration", "place_of_issue", "url", mode="before")
    @classmethod
    def validate_free_text(cls, v: Any) -> str:
        return as_text(v, "Free text field")
