"""Machine-readable visas (MRV-A and MRV-B) with a visible digital seal."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from ..codecs.c40 import c40_decode, c40_encode
from ..models.fields import DocumentFieldSet
from ..models.visa import VisaFields
from ..mrz.composers import DocumentFormat, MRZComposerFactory
from ..utils.mrz_string import mrz_to_text, to_viz
from ..vds.constants import (
    TAG_ADDITIONAL_FEATURE,
    TAG_DURATION_OF_STAY,
    TAG_NUMBER_OF_ENTRIES,
    TAG_PASSPORT_NUMBER,
    TAG_VISA_TYPE,
    VISA_TYPE_CATEGORY,
)
from ..vds.features import (
    MRVA_SEAL_LAYOUT,
    MRVB_SEAL_LAYOUT,
    decode_duration_of_stay,
    decode_entries,
    decode_hex_code,
    encode_entries,
    encode_hex_code,
    validate_duration_of_stay,
)
from ..vds.seal import DigitalSealV4, as_bytes
from .base import FIELD_NAMES, HOLDER_DEFAULTS, split_changes
from .sealed import SEAL_DEFAULTS, SEAL_FIELD_NAMES, SealedDocument

logger = logging.getLogger(__name__)

VISA_FIELD_NAMES = frozenset(VisaFields.model_fields)
VISA_FEATURE_NAMES = frozenset({"duration_of_stay", "visa_type_code", "additional_feature"})


class VisaDocument(SealedDocument):
    """
    A visa sticker: identity fields, visa fields and a seal kept in sync.

    Keyword values may name any DocumentFieldSet or VisaFields field, the
    seal's header fields, or ``duration_of_stay``, ``visa_type_code`` and
    ``additional_feature``.
    """

    type_category = VISA_TYPE_CATEGORY
    defaults = {"type_code": "V", "number": "T32069231"}
    visa_defaults: ClassVar[dict[str, Any]] = {
        "place_of_issue": "Utopia",
        "valid_from": "2007-04-15",
        "number_of_entries": "Multiple",
        "visa_type": "Tourist",
        "additional_info": "",
        "passport_number": "D23145890",
        "use_passport_in_mrz": False,
    }
    feature_defaults: ClassVar[dict[str, Any]] = {
        "duration_of_stay": [0, 3, 0],
        "visa_type_code": "0",
    }

    def __init__(
        self,
        mrz: str | Sequence[str] | None = None,
        signed_seal: bytes | None = None,
        **values: Any,
    ) -> None:
        field_values, visa_values, seal_values, feature_values = split_changes(
            values, FIELD_NAMES, VISA_FIELD_NAMES, SEAL_FIELD_NAMES, VISA_FEATURE_NAMES
        )
        self.fields = DocumentFieldSet(**{**HOLDER_DEFAULTS, **self.defaults, **field_values})
        self.visa = VisaFields(**{**self.visa_defaults, **visa_values})
        seal = DigitalSealV4(
            **{
                **SEAL_DEFAULTS,
                "authority_code": self.fields.authority_code,
                "type_category": self.type_category,
                **seal_values,
            }
        )
        features = self._features({}, self.fields, self.visa, {**self.feature_defaults, **feature_values})
        self.seal = seal.merged(features=features)
        if mrz is not None:
            self.load_mrz(mrz)
        if signed_seal is not None:
            self.load_signed_seal(signed_seal)

    @staticmethod
    def _number_for_mrz(fields: DocumentFieldSet, visa: VisaFields) -> str:
        return visa.passport_number if visa.use_passport_in_mrz else fields.number

    @property
    def mrz_number(self) -> str:
        return self._number_for_mrz(self.fields, self.visa)

    def _features(
        self,
        current: Mapping[int, bytes],
        fields: DocumentFieldSet,
        visa: VisaFields,
        feature_changes: Mapping[str, Any],
    ) -> dict[int, bytes]:
        """Seal features for a prospective state; existing tags keep their order."""
        features = dict(current)
        features[self.seal_layout.tag] = self._mrz_feature(fields, self._number_for_mrz(fields, visa))
        features[TAG_NUMBER_OF_ENTRIES] = encode_entries(visa.number_of_entries)
        if "duration_of_stay" in feature_changes:
            features[TAG_DURATION_OF_STAY] = validate_duration_of_stay(feature_changes["duration_of_stay"])
        features[TAG_PASSPORT_NUMBER] = c40_encode(visa.passport_number)
        if "visa_type_code" in feature_changes:
            features[TAG_VISA_TYPE] = encode_hex_code(
                feature_changes["visa_type_code"], "Visa type code (visa_type_code)"
            )
        if "additional_feature" in feature_changes:
            value = as_bytes(feature_changes["additional_feature"], "Additional feature (additional_feature)")
            if value:
                features[TAG_ADDITIONAL_FEATURE] = value
            else:
                features.pop(TAG_ADDITIONAL_FEATURE, None)
        return features

    def update(self, **changes: Any) -> None:
        """
        Validate every change, rebuild the seal features, then apply all of it.

        A rejected value raises before anything is assigned.
        """
        field_changes, visa_changes, seal_changes, feature_changes = split_changes(
            changes, FIELD_NAMES, VISA_FIELD_NAMES, SEAL_FIELD_NAMES, VISA_FEATURE_NAMES
        )
        fields = self.fields.merged(**field_changes)
        visa = self.visa.merged(**visa_changes)
        features = self._features(self.seal.features, fields, visa, feature_changes)
        seal = self.seal.merged(authority_code=fields.authority_code, features=features, **seal_changes)
        self.fields, self.visa, self.seal = fields, visa, seal

    def _load_parsed(self, fields: DocumentFieldSet) -> None:
        values = fields.model_dump()
        if self.visa.use_passport_in_mrz:
            values["passport_number"] = values.pop("number")
        self.update(**values)

    def _adopt_seal(self, seal: DigitalSealV4) -> None:
        field_changes = self._seal_mrz_fields(seal)
        visa_changes: dict[str, Any] = {}
        number = field_changes.pop("number")
        if self.visa.use_passport_in_mrz:
            visa_changes["passport_number"] = number
        else:
            field_changes["number"] = number

        features = seal.features
        if TAG_NUMBER_OF_ENTRIES in features:
            visa_changes["number_of_entries"] = decode_entries(features[TAG_NUMBER_OF_ENTRIES])
        if TAG_DURATION_OF_STAY in features:
            validate_duration_of_stay(decode_duration_of_stay(features[TAG_DURATION_OF_STAY]))
        if TAG_PASSPORT_NUMBER in features:
            visa_changes["passport_number"] = mrz_to_text(c40_decode(features[TAG_PASSPORT_NUMBER]))

        fields = self.fields.merged(**field_changes)
        visa = self.visa.merged(**visa_changes)
        self.fields, self.visa, self.seal = fields, visa, seal
        logger.debug("Loaded %s fields from seal for document %s", self.document_format.value, fields.number)

    @property
    def number_of_entries(self) -> int | str:
        return self.visa.number_of_entries

    @property
    def duration_of_stay(self) -> list[int] | None:
        """``[days, months, years]``, or None when the seal has no duration."""
        value = self.seal.features.get(TAG_DURATION_OF_STAY)
        return None if value is None else decode_duration_of_stay(value)

    @property
    def visa_type_code(self) -> str | None:
        value = self.seal.features.get(TAG_VISA_TYPE)
        return None if value is None else decode_hex_code(value)

    @property
    def additional_feature(self) -> bytes:
        return self.seal.features.get(TAG_ADDITIONAL_FEATURE, b"")

    def viz(self) -> dict[str, str]:
        visa = self.visa.model_dump(exclude={"use_passport_in_mrz"})
        return {**super().viz(), **{name: to_viz(value) for name, value in visa.items()}}


class MRVADocument(VisaDocument):
    """Type A visa: 44 character MRZ lines, seal MRZ feature at tag 0x01."""

    document_format = DocumentFormat.MRV_A
    composer = MRZComposerFactory.create_composer(DocumentFormat.MRV_A)
    seal_layout = MRVA_SEAL_LAYOUT


class MRVBDocument(VisaDocument):
    """Type B visa: 36 character MRZ lines, seal MRZ feature at tag 0x02."""

    document_format = DocumentFormat.MRV_B
    composer = MRZComposerFactory.create_composer(DocumentFormat.MRV_B)
    seal_layout = MRVB_SEAL_LAYOUT
    visa_defaults = {**VisaDocument.visa_defaults, "additional_info": "X" * 72}
