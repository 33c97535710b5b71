"""Base class for location registries."""
from abc import ABC, abstractmethod
from typing import List, Dict, Optional


class LocationRegistry(ABC):
    """Catalogue of states and LGAs plus the geometry to locate points in them."""

    @abstractmethod
    def list_states(self) -> List[Dict[str, str]]:
        """
        List known states.

        Returns:
            List of {"code", "name"} dicts ordered by code
        """
        pass

    @abstractmethod
    def list_lgas(self, state_code: str) -> List[Dict[str, str]]:
        """
        List LGAs of a state.

        Returns:
            List of {"code", "name"} dicts ordered by code; empty for unknown states
        """
        pass

    @abstractmethod
    def states_at(self, lat: float, lon: float) -> List[str]:
        """Codes of every state whose boundary contains the point."""
        pass

    @abstractmethod
    def lgas_at(self, state_code: str, lat: float, lon: float) -> List[str]:
        """Codes of every LGA of ``state_code`` whose boundary contains the point."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get registry name."""
        pass

    def default_state(self) -> Optional[str]:
        """State used by best-effort lookups when no boundary matches."""
        states = self.list_states()
        return states[0]["code"] if states else None

    def has_state(self, state_code: str) -> bool:
        return any(s["code"] == state_code for s in self.list_states())

    def has_lga(self, state_code: str, lga_code: str) -> bool:
        return any(lga["code"] == lga_code for lga in self.list_lgas(state_code))

    def nearest_place_name(self, lat: float, lon: float) -> Optional[str]:
        """Name of the nearest named place, if the registry knows one."""
        return None
