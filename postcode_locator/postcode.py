"""UK postcode validation and normalisation."""

import re

from postcode_locator.exceptions import PostcodeInvalid

# Outward code is 1-2 letters then 1-2 digits; inward code is a digit then 2 letters.
_UK_POSTCODE_RE = re.compile(
    r"^[A-Z]{1,2}[0-9]{1,2}[0-9][A-Z]{2}$",
    re.IGNORECASE,
)
_WHITESPACE_RE = re.compile(r"\s")


def validate(raw: str) -> bool:
    """Return True if *raw*, with all whitespace removed, looks like a UK postcode."""
    if not isinstance(raw, str):
        return False
    return bool(_UK_POSTCODE_RE.match(_WHITESPACE_RE.sub("", raw)))


def normalise(raw: str) -> str:
    """
    Normalise to the canonical 'OUTWARD INWARD' format, e.g. 'rg456aj' -> 'RG45 6AJ'.

    Raises PostcodeInvalid if the input is not a valid UK postcode.
    """
    if not validate(raw):
        raise PostcodeInvalid(raw)
    stripped = _WHITESPACE_RE.sub("", raw).upper()
    return f"{stripped[:-3]} {stripped[-3:]}"
