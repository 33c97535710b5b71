"""Compose locator, classifier, allocator, codec and rural generator into one address."""
from typing import Any, Dict, Optional, Union

from doorcode.core.classifier import AreaClassifier
from doorcode.core.codec import encode
from doorcode.core.description import generate_location_description, options_from_record
from doorcode.core.errors import AddressCodeRequiredError
from doorcode.core.locator import AdministrativeLocator
from doorcode.core.models import (
    AddressComponents,
    AddressRecord,
    DDCComponents,
    EnhancedAddress,
    LocationNotResolvable,
)
from doorcode.core.rural import RuralAddressGenerator, coordinate_description
from doorcode.core.sequence import SequenceAllocator
from doorcode.core.spatial import validate_coordinate
from doorcode.utils.logging import log_structured
from doorcode.utils.timing import time_function


class EnhancedAddressOrchestrator:
    """Main entry point for creating addresses."""

    def __init__(
        self,
        locator: AdministrativeLocator,
        classifier: AreaClassifier,
        allocator: SequenceAllocator,
        rural_generator: Optional[RuralAddressGenerator] = None
    ):
        """
        Initialize orchestrator.

        Args:
            locator: Resolves coordinates to state and LGA
            classifier: Picks area type and area code
            allocator: Issues location numbers; anything with ``next_sequence``
                and ``peek_sequence``
            rural_generator: Descriptive address generator (defaults to one
                without an address store)
        """
        self.locator = locator
        self.classifier = classifier
        self.allocator = allocator
        self.rural_generator = rural_generator or RuralAddressGenerator(registry=locator.registry)

    def _components(
        self,
        lat,
        lon,
        state_code: Optional[str] = None,
        lga_code: Optional[str] = None,
        city: Optional[str] = None,
        allocate: bool = True
    ) -> Union[DDCComponents, LocationNotResolvable]:
        if state_code and lga_code:
            match = self.locator.locate_with_override(lat, lon, state_code, lga_code)
        else:
            match = self.locator.locate(lat, lon, city=city)

        if isinstance(match, LocationNotResolvable):
            log_structured(
                "info",
                "Location not resolvable",
                lat=match.latitude,
                lon=match.longitude,
                reason=match.reason
            )
            return match

        area = self.classifier.classify(float(lat), float(lon))
        if allocate:
            sequence = self.allocator.next_sequence(match.state_code, match.lga_code, area.type, area.code)
        else:
            sequence = self.allocator.peek_sequence(match.state_code, match.lga_code, area.type, area.code)
        return DDCComponents(
            state_code=match.state_code,
            lga_code=match.lga_code,
            area_type=area.type,
            area_code=area.code,
            sequence=sequence,
        )

    def generate_code(
        self,
        lat,
        lon,
        state_code: Optional[str] = None,
        lga_code: Optional[str] = None
    ) -> Union[str, LocationNotResolvable]:
        """Allocate a new DDC for a coordinate."""
        components = self._components(lat, lon, state_code, lga_code)
        if isinstance(components, LocationNotResolvable):
            return components
        return encode(components.match, components.area, components.sequence)

    def address_update_data(self, lat, lon) -> Union[Dict[str, Any], LocationNotResolvable]:
        """
        Code and component columns for backfilling an existing address row.

        Returns:
            {"code", "state_code", "lga_code", "area_type", "area_code",
            "location_number"} or LocationNotResolvable
        """
        components = self._components(lat, lon)
        if isinstance(components, LocationNotResolvable):
            return components

        data = components.to_dict()
        data["code"] = encode(components.match, components.area, components.sequence)
        return data

    @time_function
    def build(
        self,
        lat,
        lon,
        city: Optional[str],
        user_text: Optional[str] = None,
        is_rural: bool = False,
        require_code: bool = False,
        state_code: Optional[str] = None,
        lga_code: Optional[str] = None,
        allocate: bool = True
    ) -> EnhancedAddress:
        """
        Build a code and descriptive address for a coordinate.

        Args:
            lat: Latitude
            lon: Longitude
            city: City or town name
            user_text: User-entered address text
            is_rural: Force the rural descriptive bundle
            require_code: Raise instead of returning an address without a code
            state_code: Caller-supplied state code
            lga_code: Caller-supplied LGA code
            allocate: Consume a location number. When False the code carries
                the number the next allocation would issue and nothing is
                reserved; use for previews that are not saved

        Returns:
            EnhancedAddress

        Raises:
            InvalidCoordinateError: invalid coordinate
            AddressCodeRequiredError: require_code is set and no code could be made
            SequenceExhaustedError: the area scope has no location numbers left
        """
        lat, lon = validate_coordinate(lat, lon)

        components = self._components(lat, lon, state_code, lga_code, city=city, allocate=allocate)
        not_resolvable = None
        code = None
        if isinstance(components, LocationNotResolvable):
            not_resolvable, components = components, None
            if require_code:
                raise AddressCodeRequiredError(not_resolvable)
        else:
            code = encode(components.match, components.area, components.sequence)

        rural = None
        if is_rural or not user_text:
            rural = self.rural_generator.generate(lat, lon, city, user_text)
            address_components = AddressComponents(
                primary=rural.primary_address,
                alternatives=list(rural.alternative_addresses),
                type="rural_enhanced",
                coordinates=rural.coordinate_description,
            )
        else:
            address_components = AddressComponents(
                primary=user_text,
                alternatives=[],
                type="standard",
                coordinates=coordinate_description(lat, lon),
            )

        log_structured(
            "info",
            "Address built",
            code=code,
            address_type=address_components.type,
            allocated=allocate and code is not None,
            reason=not_resolvable.reason if not_resolvable else None
        )

        return EnhancedAddress(
            code=code,
            address_components=address_components,
            components=components,
            rural_enhancements=rural,
            not_resolvable=not_resolvable,
        )

    def describe(self, record: AddressRecord) -> str:
        """Location description for a stored address."""
        return generate_location_description(options_from_record(record, self.locator.registry))
