"""Machine-Readable Zone composers for TD1, TD2, TD3 and visa formats."""

from __future__ import annotations

from .composers import (
    BaseMRZComposer,
    CrewIDComposer,
    DocumentFormat,
    MRVAComposer,
    MRVBComposer,
    MRZComposerFactory,
    MRZLayout,
    TD1Composer,
    TD2Composer,
    TD3Composer,
    compose_mrz,
    parse_mrz,
)

__all__ = [
    "BaseMRZComposer",
    "CrewIDComposer",
    "DocumentFormat",
    "MRVAComposer",
    "MRVBComposer",
    "MRZComposerFactory",
    "MRZLayout",
    "TD1Composer",
    "TD2Composer",
    "TD3Composer",
    "compose_mrz",
    "parse_mrz",
]
