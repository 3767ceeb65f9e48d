"""String, check digit and validation utilities for MRZ fields."""

from __future__ import annotations

from .check_digit import compute_check_digit, verify_check_digit
from .mrz_string import (
    date_to_mrz,
    date_to_viz,
    expand_year,
    gender_to_mrz,
    mrz_to_date,
    mrz_to_gender,
    mrz_to_name,
    mrz_to_text,
    name_to_mrz,
    normalize,
    optional_data_to_mrz,
    pad,
    to_viz,
)
from .validators import (
    describe_errors,
    validate_hex_string,
    validate_identifier_code,
    validate_mrz_string,
)

__all__ = [
    "compute_check_digit",
    "date_to_mrz",
    "date_to_viz",
    "describe_errors",
    "expand_year",
    "gender_to_mrz",
    "mrz_to_date",
    "mrz_to_gender",
    "mrz_to_name",
    "mrz_to_text",
    "name_to_mrz",
    "normalize",
    "optional_data_to_mrz",
    "pad",
    "to_viz",
    "validate_hex_string",
    "validate_identifier_code",
    "validate_mrz_string",
    "verify_check_digit",
]
