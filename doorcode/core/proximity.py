"""Proximity functions for nearby-address search."""
from typing import List, Dict, Any, Optional
import math

EARTH_RADIUS_KM = 6371.0


def calculate_distance_km(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Calculate distance between two points using Haversine formula.

    Args:
        lon1: Longitude of first point
        lat1: Latitude of first point
        lon2: Longitude of second point
        lat2: Latitude of second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat/2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon/2)**2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return EARTH_RADIUS_KM * c


def bounding_box_for_radius(lon: float, lat: float, radius_km: float):
    """
    Degree box that contains every point within ``radius_km`` of (lon, lat).

    Used as a cheap SQL prefilter before exact haversine distances.

    Returns:
        (min_lon, min_lat, max_lon, max_lat)
    """
    dlat = math.degrees(radius_km / EARTH_RADIUS_KM)
    cos_lat = math.cos(math.radians(lat))
    if cos_lat < 1e-6:
        dlon = 180.0
    else:
        dlon = min(180.0, math.degrees(radius_km / (EARTH_RADIUS_KM * cos_lat)))
    return (lon - dlon, max(-90.0, lat - dlat), lon + dlon, min(90.0, lat + dlat))


def find_nearest_features(
    lon: float,
    lat: float,
    features: List[Dict[str, Any]],
    max_distance_km: Optional[float] = None,
    limit: int = 10
) -> List[Dict[str, Any]]:
    """
    Find nearest features to a point.

    Args:
        lon: Longitude of query point
        lat: Latitude of query point
        features: List of feature dictionaries with 'lon' and 'lat' keys
        max_distance_km: Maximum distance in km (None = no limit)
        limit: Maximum number of results

    Returns:
        List of features sorted by distance, with 'distance_km' added
    """
    results = []

    for feature in features:
        feature_lon = feature.get("lon")
        feature_lat = feature.get("lat")

        if feature_lon is None or feature_lat is None:
            continue

        distance_km = calculate_distance_km(lon, lat, float(feature_lon), float(feature_lat))

        if max_distance_km is None or distance_km <= max_distance_km:
            feature_copy = feature.copy()
            feature_copy["distance_km"] = round(distance_km, 2)
            results.append(feature_copy)

    results.sort(key=lambda x: x["distance_km"])

    return results[:limit]
