"""Classification of caller-supplied identifiers."""

import re

from modules.content.domain.models import ExternalIdentifier, NumericId, OpaqueId

_NUMERIC = re.compile(r"[+-]?[0-9]+")


def classify(raw: str) -> ExternalIdentifier:
    """Classify an identifier as numeric or opaque.

    An identifier is numeric only when the whole string is an optionally
    signed run of ASCII digits. Whitespace, fractions, exponents and digit
    separators make it opaque. Never raises.

    >>> classify("42")
    NumericId(value=42, raw='42')
    >>> classify("abc123")
    OpaqueId(raw='abc123')
    """
    raw = str(raw)
    if _NUMERIC.fullmatch(raw):
        return NumericId(value=int(raw), raw=raw)
    return OpaqueId(raw=raw)
