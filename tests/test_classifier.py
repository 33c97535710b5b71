"""Tests for area classification."""
import pytest
from doorcode.core.classifier import AreaClassifier
from doorcode.core.models import AreaType


def test_classify_is_deterministic():
    classifier = AreaClassifier()
    assert classifier.classify(6.5244, 3.3792) == classifier.classify(6.5244, 3.3792)


def test_band_types_cycle():
    """Consecutive latitude bands cycle STREET, ZONE, LANDMARK."""
    classifier = AreaClassifier(band_degrees=1.0)
    types = [classifier.classify(lat + 0.5, 3.3).type for lat in range(0, 6)]
    # floor(90.5) = 90, which is 0 mod 3
    assert types == [
        AreaType.STREET, AreaType.ZONE, AreaType.LANDMARK,
        AreaType.STREET, AreaType.ZONE, AreaType.LANDMARK,
    ]


def test_area_code_is_three_digits_in_range():
    classifier = AreaClassifier()
    for lon in (-180.0, -0.005, 0.0, 3.3792, 14.99, 180.0):
        area = classifier.classify(6.5, lon)
        assert len(area.code) == 3
        assert 1 <= int(area.code) <= 999


def test_area_code_from_longitude_cell():
    classifier = AreaClassifier(band_degrees=1.0)
    # cell floor(3.3 + 180) = 183, 183 % 999 + 1 = 184
    assert classifier.classify(6.5, 3.3).code == "184"


def test_invalid_band_width():
    with pytest.raises(ValueError):
        AreaClassifier(band_degrees=-0.5)
