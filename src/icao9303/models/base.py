"""
Shared base for validated field models.

Models validate on construction and on every assignment. Validation failures
surface as the package's typed errors rather than pydantic's
``ValidationError``, and a failed assignment leaves the attribute unchanged.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from ..exceptions import FieldRangeError, FieldTypeError, ICAO9303Error, InvalidDateError
from ..utils.validators import describe_errors, validate_mrz_string


def translate_validation_error(exc: ValidationError) -> ICAO9303Error:
    """Map a pydantic ValidationError onto the package exception hierarchy."""
    errors = exc.errors()
    for error in errors:
        cause = (error.get("ctx") or {}).get("error")
        if isinstance(cause, ICAO9303Error):
            return cause

    error = errors[0]
    location = ".".join(str(part) for part in error["loc"]) or exc.title
    message = f"Value set on '{location}' has errors: {error['msg']}"
    error_type = error["type"]
    if error_type.startswith(("date", "datetime")):
        return InvalidDateError(message)
    if error_type.endswith(("_type", "_parsing")):
        return FieldTypeError(message)
    return FieldRangeError(message)


class FieldModel(BaseModel):
    """Base model with assignment validation and typed errors."""

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise translate_validation_error(e) from e

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as e:
            raise translate_validation_error(e) from e

    def merged(self, **changes: Any):
        """Return a validated copy with ``changes`` applied; ``self`` is untouched."""
        return type(self)(**{**self.model_dump(), **changes})

    def adopt(self, other: FieldModel) -> None:
        """Take over every field of an already validated instance in one step."""
        if type(other) is not type(self):
            msg = f"Cannot adopt fields of {type(other).__name__} into {type(self).__name__}"
            raise FieldTypeError(msg)
        self.__dict__.update(other.__dict__)

    def apply(self, **changes: Any) -> None:
        """Validate ``changes`` together, then assign all of them or none."""
        self.adopt(self.merged(**changes))


def parse_date(value: Any, label: str) -> date:
    """Accept a date, a datetime or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    msg = f"{label} must be a valid date string, got {value!r}."
    raise InvalidDateError(msg)


def as_text(value: Any, label: str) -> str:
    """Coerce strings and integers to text; anything else is a type error."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        msg = f"{label} must be a string, got {type(value).__name__}."
        raise FieldTypeError(msg)
    return str(value)


def check_mrz_text(value: str, label: str, minimum: int | None = None, maximum: int | None = None) -> str:
    """Uppercase ``value`` after checking its MRZ alphabet and length bounds."""
    errors = validate_mrz_string(value, minimum=minimum, maximum=maximum)
    if errors:
        msg = f"Value set on {label} has errors: {describe_errors(errors)}"
        raise FieldRangeError(msg)
    return value.upper()
