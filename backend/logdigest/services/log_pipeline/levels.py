"""
Severity normalization.

Maps the many ways log sources spell severity (words, abbreviations,
syslog numeric codes) onto the four canonical levels.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Tuple


class CanonicalLevel(str, Enum):
    """Normalized severity vocabulary."""
    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"
    DEBUG = "Debug"


# Checked in this order; first hit wins. These are substring searches,
# so "ERR_CONN" and "CRITICAL" both land on Error.
LEVEL_PATTERNS: List[Tuple[re.Pattern, CanonicalLevel]] = [
    (re.compile(r"error|err|critical|crit|fatal|emergency|emerg"), CanonicalLevel.ERROR),
    (re.compile(r"warn|warning"), CanonicalLevel.WARNING),
    (re.compile(r"info|information|notice"), CanonicalLevel.INFO),
    (re.compile(r"debug|trace|verbose"), CanonicalLevel.DEBUG),
]

# Syslog-style numeric severities
NUMERIC_LEVELS: Dict[str, CanonicalLevel] = {
    "0": CanonicalLevel.ERROR,
    "1": CanonicalLevel.ERROR,
    "2": CanonicalLevel.ERROR,
    "3": CanonicalLevel.WARNING,
    "4": CanonicalLevel.WARNING,
    "5": CanonicalLevel.INFO,
    "6": CanonicalLevel.INFO,
    "7": CanonicalLevel.DEBUG,
}

DEFAULT_LEVEL = CanonicalLevel.INFO


def normalize_level(raw: str) -> str:
    """
    Map a raw severity spelling to one of Error/Warning/Info/Debug.

    Total and pure: empty input becomes "Info", and anything that matches
    neither a word pattern nor a numeric code is returned unchanged.
    """
    raw = "" if raw is None else str(raw)
    folded = raw.strip().lower()
    if not folded:
        return DEFAULT_LEVEL.value

    for pattern, level in LEVEL_PATTERNS:
        if pattern.search(folded):
            return level.value

    numeric = NUMERIC_LEVELS.get(folded)
    if numeric is not None:
        return numeric.value

    return raw
