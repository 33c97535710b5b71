"""Configuration management for the addressing core."""
import os
from pathlib import Path
from typing import Optional, Tuple
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
PACKAGE_DATA_DIR = Path(__file__).parent.parent / "data"
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))
DUCKDB_PATH = Path(os.getenv("DATABASE_PATH", DATA_DIR / "duckdb" / "doorcode.duckdb"))

# Country settings
COUNTRY_CODE: str = os.getenv("DDC_COUNTRY_CODE", "NG")


def _parse_bbox(value: str) -> Tuple[float, float, float, float]:
    """Parse "min_lon,min_lat,max_lon,max_lat" into a tuple of floats."""
    parts = [float(p) for p in value.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Bounding box needs 4 values, got {value!r}")
    return tuple(parts)


# (min_lon, min_lat, max_lon, max_lat) for Nigeria
NATIONAL_BBOX: Tuple[float, float, float, float] = _parse_bbox(
    os.getenv("DDC_NATIONAL_BBOX", "2.5,4.0,15.0,14.0")
)

# Lookup settings
LOOKUP_TIMEOUT_SECONDS: float = float(os.getenv("LOOKUP_TIMEOUT_SECONDS", "2.0"))
BEST_EFFORT_LOOKUP: bool = os.getenv("DDC_BEST_EFFORT_LOOKUP", "false").lower() == "true"
FUZZY_THRESHOLD: float = float(os.getenv("FUZZY_THRESHOLD", "0.8"))

# Area classification
AREA_BAND_DEGREES: float = float(os.getenv("AREA_BAND_DEGREES", "0.01"))

# Nearby address search
NEARBY_RADIUS_KM: float = float(os.getenv("NEARBY_RADIUS_KM", "5.0"))
NEARBY_LIMIT: int = int(os.getenv("NEARBY_LIMIT", "5"))

# Admin layer names
LAYER_NAMES = {
    "admin1": "admin1_state",
    "admin2": "admin2_lga",
}

# Centroid computation; unset picks the UTM zone per geometry
CENTROID_CRS: Optional[str] = os.getenv("CENTROID_CRS") or None
