"""
Core identity fields shared by every ICAO 9303 document size.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from ..exceptions import FieldRangeError
from ..nationality_codes import check_code
from .base import FieldModel, as_text, check_mrz_text, parse_date


class Gender(str, Enum):
    """Gender markers allowed in the MRZ."""

    FEMALE = "F"
    MALE = "M"
    UNSPECIFIED = "X"


class DocumentFieldSet(FieldModel):
    """
    Validated holder of the identity fields printed in every MRZ.

    Assignments are validated one field at a time; a rejected value raises
    a typed error and leaves the previous value in place.
    """

    type_code: str = Field(..., description="1-2 character document code, e.g. P, V, I")
    authority_code: str = Field(..., description="3-letter issuing state or organization")
    number: str = Field(..., description="Document number, up to 9 characters")
    full_name: str = Field(
        ...,
        description="Holder's name; ', ' separates primary and secondary identifiers, "
        "'/' separates script variants",
    )
    nationality_code: str = Field(..., description="3-letter nationality code")
    birth_date: date
    gender_marker: str = Field(..., description="F, M or X")
    expiration_date: date = Field(..., description="Date of expiry, or valid thru on visas")
    optional_data: str = ""

    @field_validator("type_code", mode="before")
    @classmethod
    def validate_type_code(cls, v: Any) -> str:
        return check_mrz_text(
            as_text(v, "Document code (type_code)"), "'type_code'", minimum=1, maximum=2
        )

    @field_validator("authority_code", mode="before")
    @classmethod
    def validate_authority_code(cls, v: Any) -> str:
        code = as_text(v, "Issuing authority (authority_code)").upper()
        if len(code) != 3:
            msg = "Issuing state or organization code (authority_code) must be 3 characters."
            raise FieldRangeError(msg)
        code = check_mrz_text(code, "'authority_code'")
        check_code(code, "Issuing state or organization code (authority_code)")
        return code

    @field_validator("number", mode="before")
    @classmethod
    def validate_number(cls, v: Any) -> str:
        return check_mrz_text(as_text(v, "Document number (number)"), "'number'", maximum=9)

    @field_validator("nationality_code", mode="before")
    @classmethod
    def validate_nationality_code(cls, v: Any) -> str:
        code = as_text(v, "Nationality code (nationality_code)").upper()
        if len(code) != 3:
            msg = "Nationality code (nationality_code) must be 3 characters."
            raise FieldRangeError(msg)
        code = check_mrz_text(code, "'nationality_code'")
        check_code(code, "Nationality code (nationality_code)")
        return code

    @field_validator("birth_date", mode="before")
    @classmethod
    def validate_birth_date(cls, v: Any) -> date:
        return parse_date(v, "Date of birth (birth_date)")

    @field_validator("expiration_date", mode="before")
    @classmethod
    def validate_expiration_date(cls, v: Any) -> date:
        return parse_date(v, "Date of expiration (expiration_date)")

    @field_validator("gender_marker", mode="before")
    @classmethod
    def validate_gender_marker(cls, v: Any) -> str:
        if isinstance(v, Gender):
            return v.value
        try:
            return Gender(as_text(v, "Gender marker (gender_marker)").upper()).value
        except ValueError:
            msg = "Gender marker (gender_marker) must be [F]emale, [M]ale, or Other/Unspecified [X]."
            raise FieldRangeError(msg) from None

    @field_validator("full_name", "optional_data", mode="before")
    @classmethod
    def validate_free_text(cls, v: Any) -> str:
        return as_text(v, "Free text field")
