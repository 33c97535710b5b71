"""Area classification: which identification strategy applies to a coordinate."""
import math
from typing import Optional

from doorcode.core.codec import MAX_AREA_CODE, pad_area_code
from doorcode.core.config import AREA_BAND_DEGREES
from doorcode.core.models import AreaIdentifier, AreaType

# Band index modulo 3 selects the type in this order
BAND_TYPES = (AreaType.STREET, AreaType.ZONE, AreaType.LANDMARK)


class AreaClassifier:
    """
    Partition latitude into fixed-width bands, each mapped to one AreaType.

    The area code comes from the longitude cell of the same width, folded
    into 1..999. Every coordinate gets a type and a code, so the codec can
    always produce a DDC once a state/LGA match exists.
    """

    def __init__(self, band_degrees: Optional[float] = None):
        self.band_degrees = band_degrees or AREA_BAND_DEGREES
        if self.band_degrees <= 0:
            raise ValueError(f"band_degrees must be positive: {self.band_degrees}")

    def band_index(self, lat: float) -> int:
        return int(math.floor((lat + 90.0) / self.band_degrees))

    def cell_index(self, lon: float) -> int:
        return int(math.floor((lon + 180.0) / self.band_degrees))

    def classify(self, lat: float, lon: float) -> AreaIdentifier:
        """
        Classify a coordinate.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            AreaIdentifier with a 3-digit code
        """
        area_type = BAND_TYPES[self.band_index(lat) % len(BAND_TYPES)]
        area_code = self.cell_index(lon) % MAX_AREA_CODE + 1
        return AreaIdentifier(type=area_type, code=pad_area_code(area_code))
