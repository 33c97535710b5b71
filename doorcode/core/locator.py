"""Resolve coordinates to a state and LGA."""
import re
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Optional, Tuple, Union

from doorcode.core.config import (
    BEST_EFFORT_LOOKUP,
    FUZZY_THRESHOLD,
    LOOKUP_TIMEOUT_SECONDS,
    NATIONAL_BBOX,
)
from doorcode.core.fuzzy import best_match
from doorcode.core.models import AdministrativeMatch, LocationNotResolvable
from doorcode.core.normalization import normalize_text
from doorcode.core.spatial import point_in_bbox, validate_coordinate
from doorcode.registry.base import LocationRegistry
from doorcode.registry.state_codes import CITY_STATE_ALIASES, NIGERIA_STATE_CODES
from doorcode.utils.logging import log_error, log_structured
from doorcode.utils.timing import call_with_timeout

LookupResult = Union[AdministrativeMatch, LocationNotResolvable]


class _RegistryUnavailable(Exception):
    pass


def strip_state_prefix(lga_code: str, state_code: str) -> str:
    """
    Remove a leading state code from an LGA identifier.

    >>> strip_state_prefix("LA-015", "LA")
    '015'
    >>> strip_state_prefix("LA015", "LA")
    '015'
    """
    code = str(lga_code).strip()
    if state_code:
        code = re.sub(r"^%s[-_ ]?" % re.escape(state_code), "", code, flags=re.IGNORECASE)
    return code


class AdministrativeLocator:
    """
    Point-in-polygon lookup of the state and LGA containing a coordinate.

    Registry reads run under ``timeout`` seconds. By default an unmatched or
    ambiguous point is reported as LocationNotResolvable; ``best_effort``
    falls back to the default state and to the first LGA of the state.
    """

    def __init__(
        self,
        registry: LocationRegistry,
        national_bbox: Tuple[float, float, float, float] = NATIONAL_BBOX,
        best_effort: bool = BEST_EFFORT_LOOKUP,
        timeout: Optional[float] = LOOKUP_TIMEOUT_SECONDS
    ):
        self.registry = registry
        self.national_bbox = national_bbox
        self.best_effort = best_effort
        self.timeout = timeout

    def _read(self, method, *args):
        try:
            return call_with_timeout(method, self.timeout, *args)
        except FuturesTimeoutError as e:
            log_error(e, {
                "module": "locator",
                "registry": self.registry.get_name(),
                "operation": method.__name__,
                "timeout_seconds": self.timeout,
            }, level="warning")
            raise _RegistryUnavailable() from e
        except Exception as e:
            log_error(e, {
                "module": "locator",
                "registry": self.registry.get_name(),
                "operation": method.__name__,
            })
            raise _RegistryUnavailable() from e

    def locate(self, lat, lon, city: Optional[str] = None) -> LookupResult:
        """
        Resolve a coordinate to an AdministrativeMatch.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees
            city: Free-text city, consulted only in best-effort mode when no
                state boundary contains the point

        Returns:
            AdministrativeMatch, or LocationNotResolvable with a reason

        Raises:
            InvalidCoordinateError: missing, non-finite or out-of-range input
        """
        lat, lon = validate_coordinate(lat, lon)

        if not point_in_bbox(lat, lon, self.national_bbox):
            return LocationNotResolvable(lat, lon, "outside_national_bounds")

        try:
            return self._locate(lat, lon, city)
        except _RegistryUnavailable:
            return LocationNotResolvable(lat, lon, "registry_unavailable")

    def _locate(self, lat: float, lon: float, city: Optional[str]) -> LookupResult:
        states = self._read(self.registry.states_at, lat, lon)

        if len(states) == 1:
            state_code = states[0]
        elif len(states) > 1:
            # Shared boundary; states_at is ordered by code
            log_structured("info", "Point on state boundary", lat=lat, lon=lon, states=states)
            state_code = states[0]
        elif self.best_effort:
            state_code = None
            if city:
                state_code = self.resolve_state_from_city(city)
            if state_code is None:
                state_code = self._read(self.registry.default_state)
            if state_code is None:
                return LocationNotResolvable(lat, lon, "registry_empty")
            log_structured("info", "Best-effort state fallback", lat=lat, lon=lon, state_code=state_code)
        else:
            return LocationNotResolvable(lat, lon, "no_state_match")

        lgas = self._read(self.registry.lgas_at, state_code, lat, lon)

        if len(lgas) == 1:
            lga_code = lgas[0]
        elif len(lgas) > 1:
            log_structured("info", "Ambiguous LGA match", lat=lat, lon=lon, state_code=state_code, lgas=lgas)
            return LocationNotResolvable(lat, lon, "ambiguous_lga")
        elif self.best_effort:
            listed = self._read(self.registry.list_lgas, state_code)
            if not listed:
                return LocationNotResolvable(lat, lon, "registry_empty")
            lga_code = listed[0]["code"]
            log_structured("info", "Best-effort LGA fallback", lat=lat, lon=lon,
                           state_code=state_code, lga_code=lga_code)
        else:
            return LocationNotResolvable(lat, lon, "no_lga_match")

        return AdministrativeMatch(state_code, strip_state_prefix(lga_code, state_code))

    def locate_with_override(
        self,
        lat,
        lon,
        state_code: Optional[str] = None,
        lga_code: Optional[str] = None
    ) -> LookupResult:
        """
        Use caller-supplied state/LGA codes when both are given and known to
        the registry; otherwise fall back to ``locate``.
        """
        lat, lon = validate_coordinate(lat, lon)

        if not (state_code and lga_code):
            return self.locate(lat, lon)

        state_code = state_code.strip().upper()
        lga_code = strip_state_prefix(lga_code, state_code)
        try:
            known_state = self._read(self.registry.has_state, state_code)
            known_lga = known_state and self._read(self.registry.has_lga, state_code, lga_code)
        except _RegistryUnavailable:
            return LocationNotResolvable(lat, lon, "registry_unavailable")

        if not known_state:
            log_structured("warning", "Unknown state override ignored", state_code=state_code)
            return self.locate(lat, lon)
        if not known_lga:
            log_structured("warning", "Unknown LGA override ignored", state_code=state_code, lga_code=lga_code)
            return self.locate(lat, lon)

        return AdministrativeMatch(state_code, lga_code)

    def resolve_state_from_city(self, city: str) -> Optional[str]:
        """
        Guess a state code from a free-text city name.

        Checks the city alias table, then fuzzy-matches against state names
        known to the registry (or the national ISO table when the registry
        lists none).
        """
        if not city:
            return None

        normalized = normalize_text(city)
        if normalized in CITY_STATE_ALIASES:
            return CITY_STATE_ALIASES[normalized]

        try:
            states = self._read(self.registry.list_states)
        except _RegistryUnavailable:
            states = []
        if not states:
            states = [{"code": code, "name": name} for name, code in NIGERIA_STATE_CODES.items()]

        names = [s["name"] for s in states]
        match = best_match(city, names, threshold=FUZZY_THRESHOLD)
        if match:
            _, score, idx = match
            log_structured("debug", "City resolved to state", city=city,
                           state_code=states[idx]["code"], score=score)
            return states[idx]["code"]

        alias_names = list(CITY_STATE_ALIASES.keys())
        match = best_match(city, alias_names, threshold=FUZZY_THRESHOLD)
        if match:
            return CITY_STATE_ALIASES[match[0]]
        return None
