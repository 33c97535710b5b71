"""Human-readable descriptions for addresses without a usable street name."""
from dataclasses import dataclass, field
from typing import List, Optional

from doorcode.core.models import AddressRecord, AreaType

PLACEHOLDER_STREET_NAMES = [
    "unknown", "unnamed", "no name", "n/a", "na",
    "not available", "none", "nil", "null",
]


@dataclass
class DescriptionOptions:
    """Inputs for generate_location_description; every field is optional."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city_name: Optional[str] = None
    lga_name: Optional[str] = None
    state_name: Optional[str] = None
    area_type: Optional[str] = None
    area_code: Optional[str] = None
    nearby_landmarks: List[str] = field(default_factory=list)
    nearby_business: Optional[str] = None
    ddc: Optional[str] = None
    include_coordinates: bool = False


def _admin_context(options: DescriptionOptions) -> str:
    if options.city_name:
        return f" in {options.city_name}"
    if options.lga_name:
        return f" in {options.lga_name} LGA"
    return ""


def _has_coordinates(options: DescriptionOptions) -> bool:
    return options.latitude is not None and options.longitude is not None


def _finalize(description: str, options: DescriptionOptions) -> str:
    if options.ddc and options.ddc not in description:
        description += f" (Ref: {options.ddc})"

    if options.include_coordinates and _has_coordinates(options) and "coordinates" not in description:
        description += f" [{options.latitude:.5f}, {options.longitude:.5f}]"

    return description


def generate_location_description(options: DescriptionOptions) -> str:
    """
    Describe a location from whatever context is available.

    Fallback order:
    1. Nearest landmark or business
    2. Area type and area code
    3. City, LGA or state
    4. Coordinates to 5 decimal places
    5. "Unnamed location"

    Args:
        options: DescriptionOptions

    Returns:
        Description string, with the DDC reference appended when known
    """
    landmark = options.nearby_landmarks[0] if options.nearby_landmarks else options.nearby_business
    if landmark:
        return _finalize(f"Near {landmark}{_admin_context(options)}", options)

    if options.area_type and options.area_code:
        try:
            area_type = AreaType(options.area_type)
        except ValueError:
            area_type = None

        if area_type == AreaType.STREET:
            description = "Unnamed street"
            if options.city_name:
                description += f" in {options.city_name} (Area {options.area_code})"
            elif options.lga_name:
                description += f" in {options.lga_name} LGA"
            return _finalize(description, options)
        if area_type == AreaType.ZONE:
            return _finalize(f"Zone {options.area_code}{_admin_context(options)}", options)
        if area_type == AreaType.LANDMARK:
            return _finalize(f"Landmark area {options.area_code}{_admin_context(options)}", options)

    if options.city_name or options.lga_name:
        return _finalize(f"Unnamed location{_admin_context(options)}", options)
    if options.state_name:
        return _finalize(f"Unnamed location in {options.state_name} State", options)

    if _has_coordinates(options):
        return _finalize(
            f"Location at coordinates {options.latitude:.5f}, {options.longitude:.5f}", options
        )

    return _finalize("Unnamed location", options)


def options_from_record(record: AddressRecord, registry=None) -> DescriptionOptions:
    """
    Build description options from a stored address.

    State and LGA names are looked up in ``registry`` when one is given.
    """
    state_name = None
    lga_name = None
    if registry is not None and record.state_code:
        for state in registry.list_states():
            if state["code"] == record.state_code:
                state_name = state["name"]
                break
        if record.lga_code:
            for lga in registry.list_lgas(record.state_code):
                if lga["code"] == record.lga_code:
                    lga_name = lga["name"]
                    break

    return DescriptionOptions(
        latitude=float(record.latitude) if record.latitude is not None else None,
        longitude=float(record.longitude) if record.longitude is not None else None,
        city_name=record.city or None,
        lga_name=lga_name,
        state_name=state_name,
        area_type=record.area_type,
        area_code=record.area_code,
        nearby_landmarks=[record.landmark] if record.landmark else [],
        ddc=record.code or None,
        include_coordinates=False,
    )


def needs_generated_street_name(street_name: Optional[str]) -> bool:
    """True when the street name is missing or a placeholder such as "N/A" or "Unnamed Street"."""
    if not street_name or not street_name.strip():
        return True

    lowered = street_name.strip().lower()
    return any(lowered == p or f"{p} street" in lowered for p in PLACEHOLDER_STREET_NAMES)
