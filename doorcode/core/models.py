"""Data models for address codes and generated addresses."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


class AreaType(str, Enum):
    """Area-identification strategy embedded in a DDC."""
    STREET = "STR"
    ZONE = "Z"
    LANDMARK = "LMK"


class RuralAddressType(str, Enum):
    """Kinds of descriptive address recognised in user text."""
    LANDMARK_BASED = "landmark"
    DIRECTION_BASED = "direction"
    VILLAGE_AREA = "village"
    TRADITIONAL_NAME = "traditional"
    COORDINATE_DESCRIPTION = "coordinate"


@dataclass(frozen=True)
class AdministrativeMatch:
    """State and LGA that contain a coordinate."""
    state_code: str
    lga_code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"state_code": self.state_code, "lga_code": self.lga_code}


@dataclass(frozen=True)
class AreaIdentifier:
    """Area type plus the short area code within an LGA."""
    type: AreaType
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "code": self.code}


@dataclass(frozen=True)
class DDCComponents:
    """Typed components of a parsed Digital Door Code."""
    state_code: str
    lga_code: str
    area_type: AreaType
    area_code: str
    sequence: str

    @property
    def location_number(self) -> str:
        return self.sequence

    @property
    def match(self) -> AdministrativeMatch:
        return AdministrativeMatch(self.state_code, self.lga_code)

    @property
    def area(self) -> AreaIdentifier:
        return AreaIdentifier(self.area_type, self.area_code)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the column names of the address table."""
        return {
            "state_code": self.state_code,
            "lga_code": self.lga_code,
            "area_type": self.area_type.value,
            "area_code": self.area_code,
            "location_number": self.sequence,
        }


@dataclass(frozen=True)
class MalformedCode:
    """Failure value returned when a string is not a valid DDC."""
    code: str
    segment: Optional[str]
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "segment": self.segment, "reason": self.reason}


@dataclass(frozen=True)
class LocationNotResolvable:
    """Failure value returned when no state/LGA can be assigned to a coordinate."""
    latitude: float
    longitude: float
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"latitude": self.latitude, "longitude": self.longitude, "reason": self.reason}


@dataclass
class NearbyAddress:
    """Previously recorded address near a query point."""
    address: str
    distance_km: float
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "distance_km": self.distance_km, "code": self.code}


@dataclass
class SuggestedComponents:
    """Static catalogues offered to users describing a rural location."""
    landmarks: List[str]
    directions: List[str]
    villages: List[str]
    traditional: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "landmarks": list(self.landmarks),
            "directions": list(self.directions),
            "villages": list(self.villages),
            "traditional": list(self.traditional),
        }


@dataclass
class RuralInputClassification:
    """Result of classifying free-text location input."""
    type: RuralAddressType
    components: Dict[str, str]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "components": dict(self.components),
            "confidence": self.confidence,
        }


@dataclass
class RuralAddressResult:
    """Descriptive address bundle for a location without formal addressing."""
    primary_address: str
    alternative_addresses: List[str]
    coordinate_description: str
    suggested_components: SuggestedComponents
    nearby_addresses: List[NearbyAddress] = field(default_factory=list)
    input_classification: Optional[RuralInputClassification] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "primary_address": self.primary_address,
            "alternative_addresses": list(self.alternative_addresses),
            "coordinate_description": self.coordinate_description,
            "suggested_components": self.suggested_components.to_dict(),
            "nearby_addresses": [n.to_dict() for n in self.nearby_addresses],
            "input_classification": (
                self.input_classification.to_dict() if self.input_classification else None
            ),
        }


@dataclass
class AddressComponents:
    """Human-readable part of an enhanced address."""
    primary: str
    alternatives: List[str]
    type: str
    coordinates: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary": self.primary,
            "alternatives": list(self.alternatives),
            "type": self.type,
            "coordinates": self.coordinates,
        }


@dataclass
class EnhancedAddress:
    """Result of the address orchestrator: code plus descriptive text."""
    code: Optional[str]
    address_components: AddressComponents
    components: Optional[DDCComponents] = None
    rural_enhancements: Optional[RuralAddressResult] = None
    not_resolvable: Optional[LocationNotResolvable] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "components": self.components.to_dict() if self.components else None,
            "address_components": self.address_components.to_dict(),
            "rural_enhancements": (
                self.rural_enhancements.to_dict() if self.rural_enhancements else None
            ),
            "not_resolvable": self.not_resolvable.to_dict() if self.not_resolvable else None,
        }


@dataclass
class AddressRecord:
    """Persisted address row owned by the address store."""
    code: str
    latitude: float
    longitude: float
    city: Optional[str] = None
    street: Optional[str] = None
    landmark: Optional[str] = None
    special_description: Optional[str] = None
    state_code: Optional[str] = None
    lga_code: Optional[str] = None
    area_type: Optional[str] = None
    area_code: Optional[str] = None
    location_number: Optional[str] = None

    def display_text(self) -> str:
        """Join street, landmark, description and city into one line."""
        parts = [self.street, self.landmark, self.special_description, self.city]
        return ", ".join(p.strip() for p in parts if p and p.strip())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "city": self.city,
            "street": self.street,
            "landmark": self.landmark,
            "special_description": self.special_description,
            "state_code": self.state_code,
            "lga_code": self.lga_code,
            "area_type": self.area_type,
            "area_code": self.area_code,
            "location_number": self.location_number,
        }
