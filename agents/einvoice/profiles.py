"""Version/mode strategies for CII documents.

Each supported ``(Version, Mode)`` pair maps to one ``DocumentProfile`` that
carries every switch the serializers branch on. Adding a schema generation
means registering its profiles here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")

EN16931_GUIDELINE = "urn:cen.eu:en16931:2017"
XRECHNUNG_2_GUIDELINE = f"{EN16931_GUIDELINE}#compliant#urn:xoev-de:kosit:standard:xrechnung_2.3"
XRECHNUNG_3_GUIDELINE = f"{EN16931_GUIDELINE}#compliant#urn:xeinkauf.de:kosit:xrechnung_3.0"
PEPPOL_BUSINESS_PROCESS = "urn:fdc:peppol.eu:2017:poacc:billing:01:1.0"


class Version(IntEnum):
    V1 = 1
    V2 = 2
    V3 = 3


class Mode(Enum):
    ZUGFERD = "zugferd"
    XRECHNUNG = "xrechnung"


@dataclass(frozen=True, slots=True)
class DocumentProfile:
    version: Version
    mode: Mode
    guideline_id: str
    business_process_id: Optional[str] = None

    @property
    def includes_line_items(self) -> bool:
        return self.version >= Version.V2

    @property
    def includes_product(self) -> bool:
        return self.version >= Version.V2

    @property
    def includes_buyer_reference(self) -> bool:
        return self.version >= Version.V2

    @property
    def includes_ship_to(self) -> bool:
        return self.version >= Version.V2

    @property
    def currency_on_amounts(self) -> bool:
        """Header amounts carry ``currencyID`` only in version 1."""

        return self.version == Version.V1


PROFILES: Dict[Tuple[Version, Mode], DocumentProfile] = {
    (Version.V1, Mode.ZUGFERD): DocumentProfile(Version.V1, Mode.ZUGFERD, EN16931_GUIDELINE),
    (Version.V1, Mode.XRECHNUNG): DocumentProfile(Version.V1, Mode.XRECHNUNG, EN16931_GUIDELINE),
    (Version.V2, Mode.ZUGFERD): DocumentProfile(Version.V2, Mode.ZUGFERD, EN16931_GUIDELINE),
    (Version.V2, Mode.XRECHNUNG): DocumentProfile(Version.V2, Mode.XRECHNUNG, XRECHNUNG_2_GUIDELINE),
    (Version.V3, Mode.ZUGFERD): DocumentProfile(Version.V3, Mode.ZUGFERD, EN16931_GUIDELINE),
    (Version.V3, Mode.XRECHNUNG): DocumentProfile(
        Version.V3,
        Mode.XRECHNUNG,
        XRECHNUNG_3_GUIDELINE,
        business_process_id=PEPPOL_BUSINESS_PROCESS,
    ),
}


def coerce_version(version: object) -> Version:
    if isinstance(version, bool) or not isinstance(version, int):
        raise ConfigurationError(f"Unsupported document version: {version!r}")
    try:
        return Version(version)
    except ValueError as err:
        raise ConfigurationError(f"Unsupported document version: {version!r}") from err


def coerce_mode(mode: object) -> Mode:
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(mode)
    except ValueError as err:
        raise ConfigurationError(f"Unsupported document mode: {mode!r}") from err


def resolve_profile(version: object, mode: object = Mode.ZUGFERD) -> DocumentProfile:
    """Return the profile for ``version``/``mode`` or raise ``ConfigurationError``."""

    key = (coerce_version(version), coerce_mode(mode))
    profile = PROFILES.get(key)
    if profile is None:
        raise ConfigurationError(f"Unsupported version/mode combination: {key[0]}/{key[1].value}")
    return profile


def by_version(version: object, v1: T, v2_or_v3: T) -> T:
    """Pick the version 1 value or the one shared by versions 2 and 3."""

    return v1 if coerce_version(version) == Version.V1 else v2_or_v3
