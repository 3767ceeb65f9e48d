"""Crew documents: TD1 cards with a visible digital seal."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from ..models.base import FieldModel
from ..models.credentials import CrewIDFields, CrewLicenseFields
from ..models.fields import DocumentFieldSet
from ..models.visa import CrewFields
from ..mrz.composers import CrewIDComposer
from ..vds.constants import (
    CREW_ID_TYPE_CATEGORY,
    CREW_LICENSE_TYPE_CATEGORY,
    CREW_TYPE_CATEGORY,
    TAG_EMPLOYER_CODE,
    TAG_LICENSE_SUBAUTHORITY_CODE,
    TAG_MRZ_CREW,
    TAG_OCCUPATION_CODE,
    TAG_PRIVILEGE_CODE,
)
from ..vds.features import CREW_ID_SEAL_LAYOUT, CREW_SEAL_LAYOUT, decode_hex_code, encode_hex_code
from .base import TD1Document
from .sealed import SealedCredential

logger = logging.getLogger(__name__)

DEFAULT_DECLARATION = (
    "The holder may at all times re-enter\n"
    "upon production of this certificate\n"
    "within the period of validity"
)


def encode_code_features(
    features: dict[int, bytes], feature_changes: Mapping[str, Any], tags: Mapping[str, tuple[int, str]]
) -> None:
    """Hex-encode each changed code into the feature its name maps to."""
    for name, (tag, label) in tags.items():
        if name in feature_changes:
            features[tag] = encode_hex_code(feature_changes[name], label)


class CrewCertificate(TD1Document, SealedCredential):
    """
    Crew member certificate.

    The seal (type category 0x04) carries ``line1[0:15] + line2[0:18] + line3``
    at tag 0x01, the employer code at 0x02 and the occupation code at 0x03.
    """

    seal_layout = CREW_SEAL_LAYOUT
    type_category = CREW_TYPE_CATEGORY
    details_model = CrewFields
    details_defaults: ClassVar[dict[str, Any]] = {
        "employer": "Unknown",
        "occupation": "Unknown",
        "declaration": DEFAULT_DECLARATION,
        "place_of_issue": "Zenith, UTO",
        "url": "https://example.org/",
        "issue_date": "2007-04-15",
    }
    feature_defaults: ClassVar[dict[str, Any]] = {"employer_code": "0", "occupation_code": "0"}
    feature_names = frozenset({"employer_code", "occupation_code"})
    code_tags: ClassVar[dict[str, tuple[int, str]]] = {
        "employer_code": (TAG_EMPLOYER_CODE, "Employer code (employer_code)"),
        "occupation_code": (TAG_OCCUPATION_CODE, "Occupation code (occupation_code)"),
    }

    details: CrewFields

    @property
    def crew(self) -> CrewFields:
        return self.details

    def _features(
        self,
        current: Mapping[int, bytes],
        fields: DocumentFieldSet,
        details: FieldModel,
        feature_changes: Mapping[str, Any],
    ) -> dict[int, bytes]:
        features = dict(current)
        features[TAG_MRZ_CREW] = self._mrz_feature(fields, fields.number)
        encode_code_features(features, feature_changes, self.code_tags)
        return features

    @property
    def employer_code(self) -> str:
        return decode_hex_code(self.seal.features.get(TAG_EMPLOYER_CODE, b""))

    @property
    def occupation_code(self) -> str:
        return decode_hex_code(self.seal.features.get(TAG_OCCUPATION_CODE, b""))

    def viz(self) -> dict[str, str]:
        viz = super().viz()
        del viz["declaration"]
        return viz


class CrewID(TD1Document, SealedCredential):
    """
    Crew member identity card.

    Its MRZ carries no birth date, gender or nationality (see CrewIDComposer);
    those fields are kept on the document but never read back from the MRZ
    or the seal. The seal (type category 0x08) carries the crew MRZ slices at
    tag 0x01 and the employer code at 0x02.
    """

    composer = CrewIDComposer()
    seal_layout = CREW_ID_SEAL_LAYOUT
    type_category = CREW_ID_TYPE_CATEGORY
    details_model = CrewIDFields
    details_defaults: ClassVar[dict[str, Any]] = {"url": "https://example.org/", "issue_date": "2007-04-15"}
    feature_defaults: ClassVar[dict[str, Any]] = {"employer_code": "0"}
    feature_names = frozenset({"employer_code"})

    details: CrewIDFields

    def _features(
        self,
        current: Mapping[int, bytes],
        fields: DocumentFieldSet,
        details: FieldModel,
        feature_changes: Mapping[str, Any],
    ) -> dict[int, bytes]:
        features = dict(current)
        features[TAG_MRZ_CREW] = self._mrz_feature(fields, fields.number)
        encode_code_features(
            features, feature_changes, {"employer_code": (TAG_EMPLOYER_CODE, "Employer code (employer_code)")}
        )
        return features

    def load_mrz(self, mrz: str | Sequence[str]) -> None:
        """Replace the fields the crew ID MRZ carries; the rest stay as they are."""
        self.update(**self.composer.parse_values(mrz))

    @property
    def employer_code(self) -> str:
        return decode_hex_code(self.seal.features.get(TAG_EMPLOYER_CODE, b""))

    def viz(self) -> dict[str, str]:
        viz = super().viz()
        for name in ("birth_date", "gender_marker", "nationality_code"):
            del viz[name]
        return viz


class CrewLicense(TD1Document, SealedCredential):
    """
    Crew member license.

    The seal (type category 0x06) carries the crew MRZ slices at tag 0x01,
    the subauthority code at 0x02 and the privilege code at 0x03.
    """

    seal_layout = CREW_SEAL_LAYOUT
    type_category = CREW_LICENSE_TYPE_CATEGORY
    details_model = CrewLicenseFields
    details_defaults: ClassVar[dict[str, Any]] = {"url": "https://example.org/", "issue_date": "2007-04-15"}
    feature_defaults: ClassVar[dict[str, Any]] = {"subauthority_code": "0", "privilege_code": "0"}
    feature_names = frozenset({"subauthority_code", "privilege_code"})
    code_tags: ClassVar[dict[str, tuple[int, str]]] = {
        "subauthority_code": (TAG_LICENSE_SUBAUTHORITY_CODE, "Subauthority code (subauthority_code)"),
        "privilege_code": (TAG_PRIVILEGE_CODE, "Privilege code (privilege_code)"),
    }

    details: CrewLicenseFields

    def _features(
        self,
        current: Mapping[int, bytes],
        fields: DocumentFieldSet,
        details: FieldModel,
        feature_changes: Mapping[str, Any],
    ) -> dict[int, bytes]:
        features = dict(current)
        features[TAG_MRZ_CREW] = self._mrz_feature(fields, fields.number)
        encode_code_features(features, feature_changes, self.code_tags)
        return features

    @property
    def subauthority_code(self) -> str:
        return decode_hex_code(self.seal.features.get(TAG_LICENSE_SUBAUTHORITY_CODE, b""))

    @property
    def privilege_code(self) -> str:
        return decode_hex_code(self.seal.features.get(TAG_PRIVILEGE_CODE, b""))
