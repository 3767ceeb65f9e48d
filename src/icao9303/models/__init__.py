"""Validated field models for ICAO 9303 documents."""

from __future__ import annotations

from .base import FieldModel, translate_validation_error
from .credentials import CrewIDFields, CrewLicenseFields, PassportSealFields
from .fields import DocumentFieldSet, Gender
from .visa import CrewFields, VisaFields

__all__ = [
    "CrewFields",
    "CrewIDFields",
    "CrewLicenseFields",
    "DocumentFieldSet",
    "FieldModel",
    "Gender",
    "PassportSealFields",
    "VisaFields",
    "translate_validation_error",
]
