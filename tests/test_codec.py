"""Tests for Digital Door Code encoding and decoding."""
import pytest
from doorcode.core.codec import decode, encode, encode_components, is_valid_code, pad_area_code, scope_key
from doorcode.core.models import AdministrativeMatch, AreaIdentifier, AreaType, DDCComponents, MalformedCode


def test_encode_pads_area_code():
    """Test encoding a Lagos zone code."""
    code = encode(AdministrativeMatch("LA", "15"), AreaIdentifier(AreaType.ZONE, "1"), "0042")
    assert code == "NG-LA-15-Z001-0042"


def test_encode_accepts_int_sequence():
    code = encode(AdministrativeMatch("KD", "008"), AreaIdentifier(AreaType.STREET, 12), 7)
    assert code == "NG-KD-008-STR012-0007"


@pytest.mark.parametrize("match,area,sequence", [
    (AdministrativeMatch("lagos", "15"), AreaIdentifier(AreaType.ZONE, "1"), "0001"),
    (AdministrativeMatch("LA", "1"), AreaIdentifier(AreaType.ZONE, "1"), "0001"),
    (AdministrativeMatch("LA", "15"), AreaIdentifier(AreaType.ZONE, "1000"), "0001"),
    (AdministrativeMatch("LA", "15"), AreaIdentifier(AreaType.ZONE, "A1"), "0001"),
    (AdministrativeMatch("LA", "15"), AreaIdentifier(AreaType.ZONE, "1"), "42"),
    (AdministrativeMatch("LA", "15"), AreaIdentifier(AreaType.ZONE, "1"), 10000),
])
def test_encode_rejects_malformed_input(match, area, sequence):
    with pytest.raises(ValueError):
        encode(match, area, sequence)


def test_decode_landmark_code():
    """Test decoding an Abuja landmark code."""
    result = decode("NG-FC-01-LMK001-0007")

    assert isinstance(result, DDCComponents)
    assert result.state_code == "FC"
    assert result.lga_code == "01"
    assert result.area_type == AreaType.LANDMARK
    assert result.area_code == "001"
    assert result.location_number == "0007"


def test_decode_street_prefix_not_read_as_zone():
    result = decode("NG-LA-015-STR123-9999")
    assert isinstance(result, DDCComponents)
    assert result.area_type == AreaType.STREET
    assert result.area_code == "123"


def test_round_trip():
    match = AdministrativeMatch("OY", "031")
    area = AreaIdentifier(AreaType.STREET, "045")
    code = encode(match, area, "0100")

    parsed = decode(code)
    assert parsed.match == match
    assert parsed.area == area
    assert parsed.sequence == "0100"
    assert encode_components(parsed) == code


@pytest.mark.parametrize("code,reason", [
    ("BAD-CODE", "segment_count"),
    ("", "empty"),
    (None, "empty"),
    ("NG-LA-015-9FG4P8M", "legacy_hhg"),
    ("GH-LA-15-Z001-0042", "country_prefix"),
    ("NG-la-15-Z001-0042", "state_code"),
    ("NG-LA-1-Z001-0042", "lga_code"),
    ("NG-LA-15-X001-0042", "area_type"),
    ("NG-LA-15-Z01-0042", "area_code"),
    ("NG-LA-15-STRABC-0042", "area_code"),
    ("NG-LA-15-Z001-00A2", "sequence"),
    ("NG-LA-15-Z001-42", "sequence"),
])
def test_decode_malformed(code, reason):
    """decode never raises; it reports the failing part."""
    result = decode(code)
    assert isinstance(result, MalformedCode)
    assert result.reason == reason


def test_decode_rejects_non_ascii_digits():
    result = decode("NG-LA-١٥-Z001-0042")
    assert isinstance(result, MalformedCode)


def test_is_valid_code():
    assert is_valid_code("NG-LA-15-Z001-0042")
    assert not is_valid_code("NG-LA-15-Z001")


def test_pad_area_code():
    assert pad_area_code("1") == "001"
    assert pad_area_code("0001") == "001"
    assert pad_area_code(999) == "999"
    with pytest.raises(ValueError):
        pad_area_code("-1")


def test_scope_key():
    key = scope_key(AdministrativeMatch("LA", "15"), AreaIdentifier(AreaType.ZONE, "1"))
    assert key == "NG-LA-15-Z001"
