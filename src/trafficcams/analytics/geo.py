"""Great-circle distance and area queries over camera records.

Distances use the Haversine formula on a spherical Earth (R = 6371 km).

Coordinate validity differs per query:
- `find_nearby` and `bounds` skip records whose latitude or longitude parses to 0.
- `find_in_bounds` does not; a 0/0 record passes whenever the box contains the origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from trafficcams.ingestion.schemas import CameraRecord, RecordSource, records_of


EARTH_RADIUS_KM = 6371.0


def _to_radians(degrees):
    return degrees * math.pi / 180


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = _to_radians(lat2 - lat1)
    d_lon = _to_radians(lon2 - lon1)

    a = math.sin(d_lat / 2) * math.sin(d_lat / 2) + math.cos(_to_radians(lat1)) * math.cos(
        _to_radians(lat2)
    ) * math.sin(d_lon / 2) * math.sin(d_lon / 2)
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distances_km(
    lat_deg: float, lon_deg: float, other_lat_deg: np.ndarray, other_lon_deg: np.ndarray
) -> np.ndarray:
    """Vectorized `distance_km` from one point to many."""

    other_lat = np.asarray(other_lat_deg, dtype=float)
    other_lon = np.asarray(other_lon_deg, dtype=float)

    d_lat = _to_radians(other_lat - lat_deg)
    d_lon = _to_radians(other_lon - lon_deg)

    a = np.sin(d_lat / 2) * np.sin(d_lat / 2) + np.cos(_to_radians(lat_deg)) * np.cos(
        _to_radians(other_lat)
    ) * np.sin(d_lon / 2) * np.sin(d_lon / 2)
    # Rounding can push `a` a hair outside [0, 1] for antipodal points.
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class CameraWithDistance:
    camera: CameraRecord
    distance_km: float

    def __str__(self) -> str:
        return f"{self.camera} (distance: {self.distance_km:.2f}km)"


@dataclass(frozen=True)
class GeographicBounds:
    min_latitude: float = 0.0
    max_latitude: float = 0.0
    min_longitude: float = 0.0
    max_longitude: float = 0.0

    @property
    def center_latitude(self) -> float:
        return (self.min_latitude + self.max_latitude) / 2

    @property
    def center_longitude(self) -> float:
        return (self.min_longitude + self.max_longitude) / 2

    def __str__(self) -> str:
        return (
            f"lat: {self.min_latitude:.6f} ~ {self.max_latitude:.6f}, "
            f"lon: {self.min_longitude:.6f} ~ {self.max_longitude:.6f}"
        )


def find_nearby(
    source: RecordSource,
    target_lat: float,
    target_lon: float,
    radius_km: float,
) -> list[CameraWithDistance]:
    candidates = [record for record in records_of(source) if record.has_coordinates()]
    if not candidates:
        return []

    lats = np.array([record.numeric_latitude() for record in candidates], dtype=float)
    lons = np.array([record.numeric_longitude() for record in candidates], dtype=float)
    distances = distances_km(float(target_lat), float(target_lon), lats, lons)

    # Stable sort keeps the original record order for equal distances.
    order = np.argsort(distances, kind="stable")
    return [
        CameraWithDistance(camera=candidates[i], distance_km=float(distances[i]))
        for i in order
        if distances[i] <= radius_km
    ]


def find_in_bounds(
    source: RecordSource,
    min_lat: float,
    max_lat: float,
    min_lon: float,
    max_lon: float,
) -> list[CameraRecord]:
    return [
        record
        for record in records_of(source)
        if min_lat <= record.numeric_latitude() <= max_lat
        and min_lon <= record.numeric_longitude() <= max_lon
    ]


def bounds(source: RecordSource) -> GeographicBounds:
    valid = [record for record in records_of(source) if record.has_coordinates()]
    if not valid:
        return GeographicBounds()

    lats = [record.numeric_latitude() for record in valid]
    lons = [record.numeric_longitude() for record in valid]
    return GeographicBounds(
        min_latitude=min(lats),
        max_latitude=max(lats),
        min_longitude=min(lons),
        max_longitude=max(lons),
    )
