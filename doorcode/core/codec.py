"""Encoding and parsing of Digital Door Codes.

A DDC has five hyphen-delimited segments::

    NG-{state}-{lga}-{area type}{area code}-{sequence}
    NG-LA-15-Z001-0042

* state: two uppercase letters (ISO 3166-2:NG subdivision code)
* lga: two or three digits, unique within the state
* area: ``STR``, ``LMK`` or ``Z`` followed by a 3-digit area code
* sequence: 4-digit location number within the (state, lga, area) scope

``decode`` never raises. Anything that does not match the grammar comes back as
a ``MalformedCode`` naming the offending segment, so callers can decide whether
they are looking at a legacy code, a foreign code or corrupted data.
"""
import re
from typing import Union

from doorcode.core.config import COUNTRY_CODE
from doorcode.core.models import (
    AdministrativeMatch,
    AreaIdentifier,
    AreaType,
    DDCComponents,
    MalformedCode,
)

SEGMENT_COUNT = 5
AREA_CODE_WIDTH = 3
SEQUENCE_WIDTH = 4
MAX_AREA_CODE = 10 ** AREA_CODE_WIDTH - 1
MAX_SEQUENCE = 10 ** SEQUENCE_WIDTH - 1

STATE_PATTERN = re.compile(r"^[A-Z]{2}$")
LGA_PATTERN = re.compile(r"^[0-9]{2,3}$")
AREA_CODE_PATTERN = re.compile(r"^[0-9]{%d}$" % AREA_CODE_WIDTH)
SEQUENCE_PATTERN = re.compile(r"^[0-9]{%d}$" % SEQUENCE_WIDTH)
DIGITS_PATTERN = re.compile(r"^[0-9]+$")

# Longest prefix first so "STR"/"LMK" are never read as a one-letter type
AREA_PREFIXES = sorted((t.value for t in AreaType), key=len, reverse=True)

# First-generation codes were NG-{state}-{lga}-{geohash}
LEGACY_HHG_PATTERN = re.compile(r"^NG-[A-Z]{2}-[0-9]{2,3}-[0-9A-Z]{5,12}$")


def pad_area_code(code: Union[str, int]) -> str:
    """Zero-pad an area code to 3 digits, rejecting anything non-numeric or too wide."""
    text = str(code).strip()
    if not DIGITS_PATTERN.match(text) or int(text) > MAX_AREA_CODE:
        raise ValueError(f"Area code must be numeric in 0..{MAX_AREA_CODE}: {code!r}")
    return str(int(text)).zfill(AREA_CODE_WIDTH)


def format_sequence(sequence: Union[str, int]) -> str:
    """Format a location number as 4 digits."""
    if isinstance(sequence, int):
        if not 0 <= sequence <= MAX_SEQUENCE:
            raise ValueError(f"Sequence must be in 0..{MAX_SEQUENCE}: {sequence}")
        return str(sequence).zfill(SEQUENCE_WIDTH)
    if not SEQUENCE_PATTERN.match(sequence or ""):
        raise ValueError(f"Sequence must be {SEQUENCE_WIDTH} digits: {sequence!r}")
    return sequence


def encode(
    match: AdministrativeMatch,
    area: AreaIdentifier,
    sequence: Union[str, int]
) -> str:
    """
    Build the canonical DDC string.

    Args:
        match: State and LGA of the location
        area: Area type and code within the LGA
        sequence: Location number, either a 4-digit string or an int

    Returns:
        The DDC, e.g. "NG-LA-15-Z001-0042"

    Raises:
        ValueError: if any component is malformed
    """
    if not STATE_PATTERN.match(match.state_code or ""):
        raise ValueError(f"State code must be 2 uppercase letters: {match.state_code!r}")
    if not LGA_PATTERN.match(match.lga_code or ""):
        raise ValueError(f"LGA code must be 2-3 digits: {match.lga_code!r}")

    area_type = AreaType(area.type)
    area_code = pad_area_code(area.code)
    location_number = format_sequence(sequence)

    return f"{COUNTRY_CODE}-{match.state_code}-{match.lga_code}-{area_type.value}{area_code}-{location_number}"


def encode_components(components: DDCComponents) -> str:
    """Re-encode parsed components."""
    return encode(components.match, components.area, components.sequence)


def _split_area_segment(segment: str):
    for prefix in AREA_PREFIXES:
        if segment.startswith(prefix):
            return AreaType(prefix), segment[len(prefix):]
    return None, None


def decode(code: str) -> Union[DDCComponents, MalformedCode]:
    """
    Parse a DDC string into its components.

    Args:
        code: Candidate DDC string

    Returns:
        DDCComponents on success, MalformedCode describing the first bad segment otherwise
    """
    if not isinstance(code, str) or not code.strip():
        return MalformedCode(code=str(code), segment=None, reason="empty")

    text = code.strip()
    segments = text.split("-")

    if len(segments) != SEGMENT_COUNT:
        reason = "legacy_hhg" if LEGACY_HHG_PATTERN.match(text) else "segment_count"
        return MalformedCode(code=text, segment=None, reason=reason)

    country, state, lga, area, sequence = segments

    if country != COUNTRY_CODE:
        return MalformedCode(code=text, segment=country, reason="country_prefix")
    if not STATE_PATTERN.match(state):
        return MalformedCode(code=text, segment=state, reason="state_code")
    if not LGA_PATTERN.match(lga):
        return MalformedCode(code=text, segment=lga, reason="lga_code")

    area_type, area_code = _split_area_segment(area)
    if area_type is None:
        return MalformedCode(code=text, segment=area, reason="area_type")
    if not AREA_CODE_PATTERN.match(area_code):
        return MalformedCode(code=text, segment=area, reason="area_code")

    if not SEQUENCE_PATTERN.match(sequence):
        return MalformedCode(code=text, segment=sequence, reason="sequence")

    return DDCComponents(
        state_code=state,
        lga_code=lga,
        area_type=area_type,
        area_code=area_code,
        sequence=sequence,
    )


def is_valid_code(code: str) -> bool:
    """Return True if ``code`` parses as a DDC."""
    return isinstance(decode(code), DDCComponents)


def scope_key(match: AdministrativeMatch, area: AreaIdentifier) -> str:
    """Counter scope shared by all codes in one (state, LGA, area) cell."""
    return f"{COUNTRY_CODE}-{match.state_code}-{match.lga_code}-{AreaType(area.type).value}{pad_area_code(area.code)}"
