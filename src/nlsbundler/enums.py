"""Enumerations for nlsbundler type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so a Language can be used
directly as a path component or a JSON value.

Python 3.12+.
"""

from enum import StrEnum


class Language(StrEnum):
    """Internal three-letter language code.

    The set is closed: every member maps to exactly one locale tag in
    ``nlsbundler.locale_utils``. StrEnum provides automatic string
    conversion: str(Language.DEU) == "deu"
    """

    CHS = "chs"
    """Chinese (Simplified)"""

    CHT = "cht"
    """Chinese (Traditional)"""

    CSY = "csy"
    """Czech"""

    DEU = "deu"
    """German"""

    ENU = "enu"
    """English"""

    ESN = "esn"
    """Spanish"""

    FRA = "fra"
    """French"""

    HUN = "hun"
    """Hungarian"""

    ITA = "ita"
    """Italian"""

    JPN = "jpn"
    """Japanese"""

    KOR = "kor"
    """Korean"""

    NLD = "nld"
    """Dutch"""

    PLK = "plk"
    """Polish"""

    PTB = "ptb"
    """Portuguese (Brazil)"""

    PTG = "ptg"
    """Portuguese"""

    RUS = "rus"
    """Russian"""

    SVE = "sve"
    """Swedish"""

    TRK = "trk"
    """Turkish"""


class LoadStatus(StrEnum):
    """Outcome of loading one translation source.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Translation source found and parsed"""

    NOT_FOUND = "not_found"
    """No translation source exists for the file and language"""

    ERROR = "error"
    """Translation source exists but could not be read or parsed"""


__all__ = [
    "Language",
    "LoadStatus",
]
