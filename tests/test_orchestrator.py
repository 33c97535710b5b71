"""Tests for the enhanced address orchestrator."""
import pytest
from doorcode.core.classifier import AreaClassifier
from doorcode.core.codec import decode, is_valid_code
from doorcode.core.errors import AddressCodeRequiredError, InvalidCoordinateError
from doorcode.core.locator import AdministrativeLocator
from doorcode.core.models import AddressRecord, DDCComponents, LocationNotResolvable
from doorcode.core.orchestrator import EnhancedAddressOrchestrator
from doorcode.core.rural import RuralAddressGenerator
from doorcode.core.sequence import SequenceAllocator


def test_standard_address(orchestrator):
    """User text given and not rural: standard address with a code."""
    result = orchestrator.build(6.5, 3.3, "Ikeja", user_text="12 Allen Avenue")

    assert is_valid_code(result.code)
    assert result.code.startswith("NG-LA-015-")
    assert result.code.endswith("-0001")
    assert result.address_components.type == "standard"
    assert result.address_components.primary == "12 Allen Avenue"
    assert result.address_components.alternatives == []
    assert result.address_components.coordinates == "6°30.000'N, 3°18.000'E"
    assert result.rural_enhancements is None
    assert result.not_resolvable is None


def test_rural_address_without_text(orchestrator):
    result = orchestrator.build(6.5, 3.3, "Ikorodu")

    assert result.code is not None
    assert result.address_components.type == "rural_enhanced"
    rural = result.rural_enhancements
    assert rural.primary_address == rural.coordinate_description
    assert len(rural.alternative_addresses) >= 3
    assert result.address_components.alternatives == rural.alternative_addresses


def test_is_rural_keeps_user_text(orchestrator):
    result = orchestrator.build(6.5, 3.3, "Ikeja", user_text="Near the water tank", is_rural=True)
    assert result.address_components.type == "rural_enhanced"
    assert result.address_components.primary == "Near the water tank"


def test_sequences_increase_in_same_area(orchestrator):
    first = decode(orchestrator.build(6.5, 3.3, "Ikeja", user_text="A").code)
    second = decode(orchestrator.build(6.5, 3.3, "Ikeja", user_text="B").code)

    assert first.area == second.area
    assert (first.sequence, second.sequence) == ("0001", "0002")


def test_preview_does_not_consume_sequence(orchestrator, counter_store):
    """Unsaved builds show the next number but leave the counter alone."""
    preview = orchestrator.build(6.5, 3.3, "Ikeja", user_text="A", allocate=False)
    components = decode(preview.code)
    scope = f"NG-LA-015-{components.area_type.value}{components.area_code}"

    assert components.sequence == "0001"
    assert counter_store.peek(scope) == 0

    again = orchestrator.build(6.5, 3.3, "Ikeja", user_text="A", allocate=False)
    assert again.code == preview.code
    assert counter_store.peek(scope) == 0

    minted = orchestrator.build(6.5, 3.3, "Ikeja", user_text="A")
    assert minted.code == preview.code
    assert counter_store.peek(scope) == 1


def test_unresolvable_location_still_describes(orchestrator):
    """Outside every state: no code, descriptive address only."""
    result = orchestrator.build(5.0, 5.0, "Somewhere")

    assert result.code is None
    assert result.components is None
    assert result.not_resolvable.reason == "no_state_match"
    assert result.rural_enhancements is not None


def test_require_code_raises(orchestrator):
    with pytest.raises(AddressCodeRequiredError) as exc_info:
        orchestrator.build(5.0, 5.0, "Somewhere", require_code=True)
    assert exc_info.value.not_resolvable.reason == "no_state_match"


def test_invalid_coordinate_raises(orchestrator):
    with pytest.raises(InvalidCoordinateError):
        orchestrator.build(200, 3.3, "Ikeja")


def test_state_lga_override(orchestrator):
    result = orchestrator.build(6.5, 3.3, "Ikorodu", user_text="Main road", state_code="LA", lga_code="016")
    assert result.code.startswith("NG-LA-016-")


def test_generate_code(orchestrator):
    assert is_valid_code(orchestrator.generate_code(10.5, 7.4))
    assert isinstance(orchestrator.generate_code(5.0, 5.0), LocationNotResolvable)


def test_address_update_data(orchestrator):
    data = orchestrator.address_update_data(9.0, 7.4)

    assert data["state_code"] == "FC"
    assert data["lga_code"] == "01"
    assert data["location_number"] == "0001"
    parsed = decode(data["code"])
    assert isinstance(parsed, DDCComponents)
    assert parsed.to_dict() == {k: v for k, v in data.items() if k != "code"}


def test_to_dict(orchestrator):
    result = orchestrator.build(6.5, 3.3, "Ikeja").to_dict()
    assert result["components"]["state_code"] == "LA"
    assert result["address_components"]["type"] == "rural_enhanced"
    assert result["rural_enhancements"]["suggested_components"]["directions"][0] == "North"


def test_describe(orchestrator):
    record = AddressRecord(
        code="NG-KD-008-Z020-0001",
        latitude=10.5,
        longitude=7.4,
        city="Kaduna",
        area_type="Z",
        area_code="020",
    )
    assert orchestrator.describe(record) == "Zone 020 in Kaduna (Ref: NG-KD-008-Z020-0001)"


def test_orchestrator_with_duckdb(populated_db):
    registry = populated_db.load_registry()
    orchestrator = EnhancedAddressOrchestrator(
        locator=AdministrativeLocator(registry, timeout=None),
        classifier=AreaClassifier(),
        allocator=SequenceAllocator(populated_db),
        rural_generator=RuralAddressGenerator(address_store=populated_db, registry=registry, timeout=None),
    )

    result = orchestrator.build(6.6, 3.8, "Ikorodu")
    assert result.code.startswith("NG-LA-016-")

    components = decode(result.code)
    scope = f"NG-LA-016-{components.area_type.value}{components.area_code}"
    assert populated_db.peek(scope) == 1
