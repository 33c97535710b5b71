"""Tests for fuzzy matching."""
import pytest
from doorcode.core.fuzzy import fuzzy_match, best_match


def test_fuzzy_match():
    """Test fuzzy matching."""
    choices = ["Lagos", "Kaduna", "Kano", "Oyo"]

    matches = fuzzy_match("Lagos", choices, threshold=0.7)
    assert len(matches) > 0
    assert matches[0][0] == "Lagos"
    assert matches[0][1] >= 0.7

    matches = fuzzy_match("lagos", choices, threshold=0.7)
    assert len(matches) > 0

    matches = fuzzy_match("xyz", choices, threshold=0.7)
    assert len(matches) == 0


def test_fuzzy_match_returns_index():
    choices = ["Federal Capital Territory", "Kaduna"]
    matches = fuzzy_match("FCT", choices, threshold=0.8)
    assert matches[0][0] == "Federal Capital Territory"
    assert matches[0][2] == 0


def test_best_match():
    """Test best match function."""
    choices = ["Lagos", "Kaduna", "Kano"]

    match = best_match("Kadunna", choices, threshold=0.7)
    assert match is not None
    assert match[0] == "Kaduna"

    match = best_match("xyz", choices, threshold=0.7)
    assert match is None
