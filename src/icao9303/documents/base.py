"""
Travel documents bind a DocumentFieldSet to one MRZ size.

Documents are the mutation seam: ``update`` validates a complete new field
set before replacing the old one, and the MRZ is recomputed on every read.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from ..exceptions import FieldTypeError
from ..models.fields import DocumentFieldSet
from ..mrz.composers import BaseMRZComposer, DocumentFormat, MRZComposerFactory
from ..utils.mrz_string import to_viz

logger = logging.getLogger(__name__)

HOLDER_DEFAULTS: dict[str, Any] = {
    "authority_code": "UTO",
    "number": "D23145890",
    "full_name": "Eriksson, Anna-Maria",
    "nationality_code": "UTO",
    "birth_date": "1974-08-12",
    "gender_marker": "F",
    "expiration_date": "2012-04-15",
    "optional_data": "",
}

FIELD_NAMES = frozenset(DocumentFieldSet.model_fields)


def split_changes(changes: Mapping[str, Any], *groups: frozenset[str]) -> list[dict[str, Any]]:
    """
    Partition keyword values by the group that owns each name.

    Raises:
        FieldTypeError: If a name belongs to none of the groups
    """
    parts: list[dict[str, Any]] = [{} for _ in groups]
    for name, value in changes.items():
        for part, names in zip(parts, groups):
            if name in names:
                part[name] = value
                break
        else:
            msg = f"Unknown document field: '{name}'"
            raise FieldTypeError(msg)
    return parts


class TravelDocument:
    """A machine-readable travel document of one size."""

    document_format: ClassVar[DocumentFormat]
    composer: ClassVar[BaseMRZComposer]
    defaults: ClassVar[dict[str, Any]] = {}

    def __init__(self, mrz: str | Sequence[str] | None = None, **values: Any) -> None:
        (field_values,) = split_changes(values, FIELD_NAMES)
        self.fields = DocumentFieldSet(**{**HOLDER_DEFAULTS, **self.defaults, **field_values})
        if mrz is not None:
            self.load_mrz(mrz)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(number={self.fields.number!r}, name={self.fields.full_name!r})"

    @property
    def mrz_number(self) -> str:
        """Value printed in the MRZ document number position."""
        return self.fields.number

    @property
    def mrz_lines(self) -> list[str]:
        return self.composer.compose(self.fields, self.mrz_number)

    @property
    def mrz_line1(self) -> str:
        return self.mrz_lines[0]

    @property
    def mrz_line2(self) -> str:
        return self.mrz_lines[1]

    @property
    def machine_readable_zone(self) -> str:
        """All MRZ lines concatenated without separators."""
        return "".join(self.mrz_lines)

    def update(self, **changes: Any) -> None:
        """Validate ``changes`` against the current fields, then apply all of them."""
        (field_changes,) = split_changes(changes, FIELD_NAMES)
        self.fields = self.fields.merged(**field_changes)

    def load_mrz(self, mrz: str | Sequence[str]) -> None:
        """
        Replace the fields with those parsed from ``mrz``.

        Raises:
            LineLengthError: If the MRZ does not have this document's shape
            CheckDigitError: If any check digit does not match
        """
        self._load_parsed(self.composer.parse(mrz))

    def load_mrz_line(self, line_number: int, line: str) -> None:
        """Replace one MRZ line (1-based) and re-read the whole MRZ."""
        lines = self.mrz_lines
        if not 1 <= line_number <= len(lines):
            msg = f"{self.document_format.value} has no MRZ line {line_number}"
            raise FieldTypeError(msg)
        self.composer.check_line(line, line_number)
        lines[line_number - 1] = line
        self.load_mrz(lines)

    def _load_parsed(self, fields: DocumentFieldSet) -> None:
        self.fields = fields

    def viz(self) -> dict[str, str]:
        """Uppercase display strings for the visual inspection zone."""
        return {name: to_viz(value) for name, value in self.fields.model_dump().items()}


class TD1Document(TravelDocument):
    """ID card sized document with a three line MRZ."""

    document_format = DocumentFormat.TD1
    composer = MRZComposerFactory.create_composer(DocumentFormat.TD1)
    defaults = {"type_code": "I"}

    @property
    def mrz_line3(self) -> str:
        return self.mrz_lines[2]


class TD2Document(TravelDocument):
    """ID card sized document with a two line, 36 character MRZ."""

    document_format = DocumentFormat.TD2
    composer = MRZComposerFactory.create_composer(DocumentFormat.TD2)
    defaults = {"type_code": "I"}


class TD3Document(TravelDocument):
    """Passport booklet with a two line, 44 character MRZ."""

    document_format = DocumentFormat.TD3
    composer = MRZComposerFactory.create_composer(DocumentFormat.TD3)
    defaults = {"type_code": "P"}
