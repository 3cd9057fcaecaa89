"""
Value types shared across the geo package.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


def is_valid_coordinates(lat: float, lng: float) -> bool:
    """Check that both values are finite and within latitude/longitude range."""
    return (
        math.isfinite(lat) and math.isfinite(lng)
        and -90 <= lat <= 90 and -180 <= lng <= 180
    )


@dataclass(frozen=True)
class Coordinates:
    """Immutable, validated latitude/longitude pair."""

    lat: float
    lng: float

    def __post_init__(self):
        if not is_valid_coordinates(self.lat, self.lng):
            raise ValueError(f"Invalid coordinates: ({self.lat}, {self.lng})")

    @classmethod
    def parse(cls, lat: Any, lng: Any) -> Optional["Coordinates"]:
        """Build coordinates from raw values, returning None when invalid."""
        try:
            lat_value = float(lat)
            lng_value = float(lng)
        except (TypeError, ValueError):
            return None

        if not is_valid_coordinates(lat_value, lng_value):
            return None
        return cls(lat_value, lng_value)

    def cache_key(self) -> str:
        # 6 decimals is roughly 0.11m at the equator
        return f"{self.lat:.6f},{self.lng:.6f}"

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class DistancePoint:
    """Traffic-aware metrics for one directed leg."""

    distance_km: float
    duration_minutes: float

    def __post_init__(self):
        if self.distance_km < 0 or self.duration_minutes < 0:
            raise ValueError(
                f"Distance and duration must be non-negative, got "
                f"({self.distance_km}, {self.duration_minutes})"
            )

    @classmethod
    def from_provider(cls, distance_meters: float, duration_seconds: float) -> "DistancePoint":
        """Convert provider meters/seconds to kilometres/minutes at one decimal."""
        return cls(
            distance_km=round(distance_meters / 1000, 1),
            duration_minutes=round(duration_seconds / 60, 1),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "distance_km": self.distance_km,
            "duration_minutes": self.duration_minutes,
        }


class TravelMode(str, Enum):
    """Travel modes accepted by the distance provider."""

    DRIVING = "driving"
    WALKING = "walking"
    TRANSIT = "transit"

    @classmethod
    def coerce(cls, value: Any) -> "TravelMode":
        """Accept a TravelMode or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unsupported travel mode '{value}' (expected one of: {allowed})")


@dataclass(frozen=True)
class Landmark:
    """A stored reference point the target is measured against."""

    id: str
    name: str
    coordinates: Coordinates
    maps_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "maps_url": self.maps_url,
            "lat": self.coordinates.lat,
            "lng": self.coordinates.lng,
        }


@dataclass(frozen=True)
class TravelLegResult:
    """
    Outcome of both directed legs for one landmark.

    Either leg may be None independently; error_message then explains
    which direction failed.
    """

    landmark_id: str
    landmark_name: str
    to_landmark: Optional[DistancePoint] = None
    to_target: Optional[DistancePoint] = None
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "landmark": self.landmark_name,
            "landmarkId": self.landmark_id,
            "to_landmark": self.to_landmark.to_dict() if self.to_landmark else None,
            "to_target": self.to_target.to_dict() if self.to_target else None,
        }
        if self.error_message:
            payload["error"] = self.error_message
        return payload


@dataclass(frozen=True)
class TravelReport:
    """Full travel matrix for one target, ready for serialisation."""

    target: Coordinates
    mode: TravelMode
    generated_at: str
    results: List[TravelLegResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target.to_dict(),
            "mode": self.mode.value,
            "generatedAt": self.generated_at,
            "results": [result.to_dict() for result in self.results],
        }


# Provider outcome statuses
STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"


@dataclass(frozen=True)
class GeocodeOutcome:
    """Result of one geocode call; only OK carries coordinates."""

    status: str
    coordinates: Optional[Coordinates] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class DistanceOutcome:
    """Result of one distance lookup between two points."""

    status: str
    element_status: Optional[str] = None
    distance_meters: Optional[float] = None
    duration_seconds: Optional[float] = None
    duration_in_traffic_seconds: Optional[float] = None
    error_message: Optional[str] = None
