"""
Documents that carry a version 4 visible digital seal next to their MRZ.

The seal's MRZ feature is re-derived on every update. Loading seal bytes
goes the other way: the MRZ feature is decoded and its check digits verified
before any document field changes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from ..exceptions import FieldRangeError
from ..models.base import FieldModel
from ..models.fields import DocumentFieldSet
from ..utils.mrz_string import pad, to_viz
from ..vds.barcode import encode_barcode_payload
from ..vds.features import SealMRZLayout, derive_fields, derive_seal_feature
from ..vds.seal import DigitalSealV4
from .base import FIELD_NAMES, HOLDER_DEFAULTS, TravelDocument, split_changes

logger = logging.getLogger(__name__)

SEAL_DEFAULTS: dict[str, Any] = {
    "identifier_code": "UTSS",
    "cert_reference": "00000",
    "issue_date": "2007-04-15",
    "signature_date": "2007-04-15",
    "feature_definition": 0x01,
}

SEAL_FIELD_NAMES = frozenset(
    {
        "identifier_code",
        "cert_reference",
        "issue_date",
        "signature_date",
        "signature_data",
        "feature_definition",
        "type_category",
    }
)


class SealedDocument(TravelDocument, ABC):
    """Base class for documents whose MRZ is mirrored in a DigitalSealV4."""

    seal_layout: ClassVar[SealMRZLayout]
    type_category: ClassVar[int]

    seal: DigitalSealV4

    @property
    def header_zone(self) -> bytes:
        return self.seal.header_zone

    @property
    def message_zone(self) -> bytes:
        return self.seal.message_zone

    @property
    def signature_zone(self) -> bytes:
        return self.seal.signature_zone

    @property
    def unsigned_seal(self) -> bytes:
        return self.seal.unsigned_seal

    @property
    def signed_seal(self) -> bytes:
        return self.seal.signed_seal

    @property
    def barcode_payload(self) -> str:
        """Base45 text of the signed seal."""
        return encode_barcode_payload(self.seal)

    def stub_sign(self) -> bytes:
        return self.seal.stub_sign()

    def _mrz_feature(self, fields: DocumentFieldSet, number: str) -> bytes:
        return derive_seal_feature(self.seal_layout, self.composer.compose(fields, number))

    def _seal_mrz_fields(self, seal: DigitalSealV4) -> dict[str, Any]:
        feature = seal.features.get(self.seal_layout.tag)
        if feature is None:
            msg = f"Seal has no MRZ feature (tag 0x{self.seal_layout.tag:02X})"
            raise FieldRangeError(msg)
        return derive_fields(self.seal_layout, feature)

    def _load_parsed(self, fields: DocumentFieldSet) -> None:
        self.update(**fields.model_dump())

    @abstractmethod
    def _adopt_seal(self, seal: DigitalSealV4) -> None:
        """Re-derive document fields from a validated seal, then take it over."""

    def load_header_zone(self, data: bytes) -> None:
        """Read a header zone; the issuing authority carries over to the MRZ."""
        values, offset = DigitalSealV4.parse_header_zone(data)
        if offset != len(data):
            msg = f"Header zone has {len(data) - offset} unexpected trailing bytes"
            raise FieldRangeError(msg)
        authority = values.pop("authority_code")
        self.update(authority_code=pad(authority, 3), **values)

    def load_message_zone(self, data: bytes) -> None:
        features, _ = DigitalSealV4.parse_message_zone(data)
        self._adopt_seal(self.seal.merged(features=features))

    def load_signature_zone(self, data: bytes) -> None:
        self.seal.load_signature_zone(data)

    def load_unsigned_seal(self, data: bytes) -> None:
        self._adopt_seal(self.seal.merged(**DigitalSealV4.decode(data, signed=False)))

    def load_signed_seal(self, data: bytes) -> None:
        """
        Replace the seal and every field it carries with ``data``.

        Raises:
            SealFormatError: If the magic or version byte is wrong
            SignatureMarkerError: If the signature zone is missing
            CheckDigitError: If a check digit in the MRZ feature does not match
        """
        self._adopt_seal(self.seal.merged(**DigitalSealV4.decode(data, signed=True)))


# The issue date of a credential is the seal's issue date
CREDENTIAL_SEAL_FIELD_NAMES = SEAL_FIELD_NAMES - {"issue_date"}


class SealedCredential(SealedDocument):
    """
    A sealed document with its own display fields next to the identity fields.

    ``details`` holds the display fields, including ``issue_date``, which is
    always the seal's issue date. Subclasses say which features they write
    and what they read back from a loaded seal.
    """

    details_model: ClassVar[type[FieldModel]]
    details_defaults: ClassVar[dict[str, Any]] = {}
    feature_defaults: ClassVar[dict[str, Any]] = {}
    feature_names: ClassVar[frozenset[str]] = frozenset()

    details: FieldModel

    def __init__(
        self,
        mrz: str | Sequence[str] | None = None,
        signed_seal: bytes | None = None,
        **values: Any,
    ) -> None:
        field_values, detail_values, seal_values, feature_values = self._split_changes(values)
        self.fields = DocumentFieldSet(**{**HOLDER_DEFAULTS, **self.defaults, **field_values})
        self.details = self.details_model(**{**self.details_defaults, **detail_values})
        seal = DigitalSealV4(
            **{
                **SEAL_DEFAULTS,
                "authority_code": self.fields.authority_code,
                "type_category": self.type_category,
                **seal_values,
                "issue_date": self.details.issue_date,
            }
        )
        self.seal = seal.merged(
            features=self._features({}, self.fields, self.details, {**self.feature_defaults, **feature_values})
        )
        if mrz is not None:
            self.load_mrz(mrz)
        if signed_seal is not None:
            self.load_signed_seal(signed_seal)

    def _split_changes(self, changes: Mapping[str, Any]) -> list[dict[str, Any]]:
        return split_changes(
            changes,
            FIELD_NAMES,
            frozenset(self.details_model.model_fields),
            CREDENTIAL_SEAL_FIELD_NAMES,
            self.feature_names,
        )

    @abstractmethod
    def _features(
        self,
        current: Mapping[int, bytes],
        fields: DocumentFieldSet,
        details: FieldModel,
        feature_changes: Mapping[str, Any],
    ) -> dict[int, bytes]:
        """Return the seal features for ``fields`` and ``details``."""

    def _seal_details(self, seal: DigitalSealV4) -> dict[str, Any]:
        """Display field values a loaded seal carries besides its issue date."""
        return {}

    def update(self, **changes: Any) -> None:
        field_changes, detail_changes, seal_changes, feature_changes = self._split_changes(changes)
        fields = self.fields.merged(**field_changes)
        details = self.details.merged(**detail_changes)
        seal = self.seal.merged(
            authority_code=fields.authority_code,
            issue_date=details.issue_date,
            features=self._features(self.seal.features, fields, details, feature_changes),
            **seal_changes,
        )
        self.fields, self.details, self.seal = fields, details, seal

    def _adopt_seal(self, seal: DigitalSealV4) -> None:
        # Optional data is not carried by the seal and stays as it is
        fields = self.fields.merged(**self._seal_mrz_fields(seal))
        details = self.details.merged(issue_date=seal.issue_date, **self._seal_details(seal))
        self.fields, self.details, self.seal = fields, details, seal
        logger.debug("Loaded %s fields from seal for document %s", type(self).__name__, fields.number)

    def viz(self) -> dict[str, str]:
        details = self.details.model_dump(exclude={"url"})
        return {**super().viz(), **{name: to_viz(value) for name, value in details.items()}}
