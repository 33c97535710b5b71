"""Descriptive addresses for rural and unmapped locations."""
import math
import re
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Dict, List, Optional

import duckdb

from doorcode.core.config import LOOKUP_TIMEOUT_SECONDS, NEARBY_LIMIT, NEARBY_RADIUS_KM
from doorcode.core.errors import StoreUnavailableError
from doorcode.core.models import (
    NearbyAddress,
    RuralAddressResult,
    RuralAddressType,
    RuralInputClassification,
    SuggestedComponents,
)
from doorcode.core.proximity import find_nearest_features
from doorcode.utils.logging import log_error, log_structured
from doorcode.utils.timing import call_with_timeout

LANDMARK_PATTERN = re.compile(r"(near|close to|beside)")
DIRECTION_PATTERN = re.compile(r"(north|south|east|west|km|kilometres?|kilometers?|miles?)\s+(of|from)\b")
SETTLEMENT_PATTERN = re.compile(r"(village|community|settlement)")
TRADITIONAL_PATTERN = re.compile(r"(unguwar|gidan|sabon|tudun|kasuwar|magaji|sarki|galadima|madaki)")

# Tests applied in order; the first hit wins
CLASSIFICATION_RULES = [
    (LANDMARK_PATTERN, RuralAddressType.LANDMARK_BASED, 0.8),
    (DIRECTION_PATTERN, RuralAddressType.DIRECTION_BASED, 0.85),
    (SETTLEMENT_PATTERN, RuralAddressType.VILLAGE_AREA, 0.9),
    (TRADITIONAL_PATTERN, RuralAddressType.TRADITIONAL_NAME, 0.75),
]

LANDMARK_SUGGESTIONS = [
    "Main Market",
    "Primary School",
    "Health Centre",
    "Police Station",
    "Motor Park",
    "Church",
    "Mosque",
    "Community Center",
    "Water Borehole",
    "Village Square",
    "Post Office",
    "Bank Branch",
    "Filling Station",
    "River/Stream",
    "Hill/Mountain",
    "Farm Settlement",
    "Traditional Ruler's Palace",
    "Local Government Office",
]

DIRECTION_SUGGESTIONS = [
    "North", "South", "East", "West",
    "Northeast", "Northwest", "Southeast", "Southwest",
]

VILLAGE_TEMPLATES = [
    "{city} Village",
    "New {city}",
    "Old {city}",
    "{city} Ward",
    "{city} Community",
    "{city} Settlement",
]

# Hausa place-name elements
TRADITIONAL_SUGGESTIONS = [
    "Sabon Gari",
    "Tudun Wada",
    "Unguwar",
    "Gidan",
    "Kasuwar",
    "Galadima",
    "Madaki",
    "Sarki",
    "Magaji",
]


def classify_rural_input(text: str) -> RuralInputClassification:
    """
    Classify free-text location input.

    Checks, case-insensitively and in this order: landmark proximity,
    direction/distance, settlement words, traditional place-name elements.
    Anything else is a coordinate description with confidence 0.5.
    """
    lowered = (text or "").lower()
    for pattern, address_type, confidence in CLASSIFICATION_RULES:
        if pattern.search(lowered):
            return RuralInputClassification(address_type, {"description": text}, confidence)
    return RuralInputClassification(
        RuralAddressType.COORDINATE_DESCRIPTION, {"description": text or ""}, 0.5
    )


def landmark_based_address(
    primary_landmark: str,
    secondary_landmark: Optional[str] = None,
    direction: Optional[str] = None,
    distance: Optional[str] = None,
    description: Optional[str] = None
) -> str:
    """e.g. "Main Market, 2km North, near Police Station (Blue gate)"."""
    address = primary_landmark
    if direction and distance:
        address += f", {distance} {direction}"
    if secondary_landmark:
        address += f", near {secondary_landmark}"
    if description:
        address += f" ({description})"
    return address


def direction_based_address(
    reference_point: str,
    direction: str,
    distance: str,
    additional_info: Optional[str] = None
) -> str:
    """e.g. "3km North of Zaria, behind the school"."""
    address = f"{distance} {direction} of {reference_point}"
    if additional_info:
        address += f", {additional_info}"
    return address


def village_area_address(
    village: str,
    area: Optional[str] = None,
    quarter: Optional[str] = None,
    family_name: Optional[str] = None,
    local_name: Optional[str] = None
) -> str:
    """e.g. "Kurmin Mashi, Tudun Area, Galadima Quarter, Bello Compound"."""
    address = village
    if area:
        address += f", {area} Area"
    if quarter:
        address += f", {quarter} Quarter"
    if family_name:
        address += f", {family_name} Compound"
    if local_name:
        address += f" ({local_name})"
    return address


def _degrees_minutes(value: float):
    magnitude = abs(value)
    degrees = int(math.floor(magnitude))
    minutes = round((magnitude - degrees) * 60, 3)
    if minutes >= 60:
        degrees += 1
        minutes = 0.0
    return degrees, minutes


def coordinate_description(lat: float, lon: float, nearest_town: Optional[str] = None) -> str:
    """
    Degrees and decimal minutes with hemisphere letters.

    >>> coordinate_description(6.5, 3.3, "Ikeja")
    "6°30.000'N, 3°18.000'E (nearest town: Ikeja)"
    """
    lat_deg, lat_min = _degrees_minutes(lat)
    lon_deg, lon_min = _degrees_minutes(lon)
    lat_dir = "N" if lat >= 0 else "S"
    lon_dir = "E" if lon >= 0 else "W"

    text = f"{lat_deg}°{lat_min:.3f}'{lat_dir}, {lon_deg}°{lon_min:.3f}'{lon_dir}"
    if nearest_town:
        text += f" (nearest town: {nearest_town})"
    return text


def rural_address_suggestions(city: str) -> SuggestedComponents:
    """Static catalogues of landmark types, directions, village names and Hausa place-name elements."""
    return SuggestedComponents(
        landmarks=list(LANDMARK_SUGGESTIONS),
        directions=list(DIRECTION_SUGGESTIONS),
        villages=[t.format(city=city) for t in VILLAGE_TEMPLATES],
        traditional=list(TRADITIONAL_SUGGESTIONS),
    )


def enhance_rural_address(original_address: str, lat: float, lon: float, city: str) -> Dict:
    """
    Pass user text through unchanged alongside generic fallbacks.

    Returns:
        {"enhanced": str, "fallbacks": [str], "type": RuralAddressType}
    """
    classification = classify_rural_input(original_address)

    fallbacks = [
        coordinate_description(lat, lon, city),
        landmark_based_address(f"{city} Area", description="Rural location"),
        village_area_address(city, area="Rural", local_name="GPS coordinates available"),
        direction_based_address(
            f"{city} town center",
            direction="outskirts",
            distance="rural area",
            additional_info="exact coordinates recorded",
        ),
    ]

    return {
        "enhanced": original_address,
        "fallbacks": list(dict.fromkeys(fallbacks)),
        "type": classification.type,
    }


def find_nearby_addresses(
    address_store,
    lat: float,
    lon: float,
    radius_km: float = NEARBY_RADIUS_KM,
    limit: int = NEARBY_LIMIT,
    timeout: Optional[float] = LOOKUP_TIMEOUT_SECONDS
) -> List[NearbyAddress]:
    """
    Stored addresses within ``radius_km``, nearest first.

    Store failures and timeouts are logged and give an empty list.
    """
    if address_store is None:
        return []

    try:
        rows = call_with_timeout(address_store.find_near, timeout, lat, lon, radius_km)
    except FuturesTimeoutError as e:
        log_error(e, {
            "module": "rural",
            "function": "find_nearby_addresses",
            "timeout_seconds": timeout,
        }, level="warning")
        return []
    except (StoreUnavailableError, duckdb.Error) as e:
        log_error(e, {
            "module": "rural",
            "function": "find_nearby_addresses",
        }, level="warning")
        return []
    except Exception as e:
        log_error(e, {
            "module": "rural",
            "function": "find_nearby_addresses",
            "lat": lat,
            "lon": lon,
        })
        return []

    nearest = find_nearest_features(lon, lat, rows, max_distance_km=radius_km, limit=limit)
    return [
        NearbyAddress(
            address=row.get("address_text", ""),
            distance_km=row["distance_km"],
            code=row.get("code") or "",
        )
        for row in nearest
    ]


class RuralAddressGenerator:
    """Builds the descriptive address bundle for a coordinate without formal addressing."""

    def __init__(
        self,
        address_store=None,
        registry=None,
        radius_km: float = NEARBY_RADIUS_KM,
        limit: int = NEARBY_LIMIT,
        timeout: Optional[float] = LOOKUP_TIMEOUT_SECONDS
    ):
        self.address_store = address_store
        self.registry = registry
        self.radius_km = radius_km
        self.limit = limit
        self.timeout = timeout

    def _nearest_town(self, lat: float, lon: float, city: Optional[str]) -> Optional[str]:
        if city:
            return city
        if self.registry is None:
            return None
        try:
            return call_with_timeout(self.registry.nearest_place_name, self.timeout, lat, lon)
        except FuturesTimeoutError as e:
            log_error(e, {"module": "rural", "function": "_nearest_town"}, level="warning")
            return None
        except Exception as e:
            log_error(e, {"module": "rural", "function": "_nearest_town", "lat": lat, "lon": lon})
            return None

    def generate(
        self,
        lat: float,
        lon: float,
        city: Optional[str],
        user_text: Optional[str] = None
    ) -> RuralAddressResult:
        """
        Generate primary and alternative descriptive addresses.

        Args:
            lat: Latitude
            lon: Longitude
            city: City or town used in templates and as the nearest town
            user_text: Free-text description from the user, kept verbatim

        Returns:
            RuralAddressResult
        """
        town = self._nearest_town(lat, lon, city)
        place = town or "Unknown"
        description = coordinate_description(lat, lon, town)

        classification = None
        if user_text:
            classification = classify_rural_input(user_text)
            primary = enhance_rural_address(user_text, lat, lon, place)["enhanced"]
        else:
            primary = description

        alternatives = [
            landmark_based_address(f"{place} Area", description="Rural location with GPS coordinates"),
            village_area_address(place, area="Outskirts", local_name="Exact location via coordinates"),
            direction_based_address(
                place,
                direction="rural area",
                distance="countryside",
                additional_info="GPS location recorded",
            ),
            description,
        ]

        nearby = find_nearby_addresses(
            self.address_store, lat, lon, self.radius_km, self.limit, self.timeout
        )

        log_structured(
            "debug",
            "Rural address generated",
            lat=lat,
            lon=lon,
            city=city,
            input_type=classification.type.value if classification else None,
            nearby_count=len(nearby)
        )

        return RuralAddressResult(
            primary_address=primary,
            alternative_addresses=list(dict.fromkeys(alternatives)),
            coordinate_description=description,
            suggested_components=rural_address_suggestions(place),
            nearby_addresses=nearby,
            input_classification=classification,
        )
