"""
Geo module for the landmark travel service.

This module provides functionality for:
- Extracting coordinates and search text from map links
- Expanding short map links
- Geocoding with ordered candidate fallback
- Bidirectional, traffic-aware travel matrices
- Expiring caches and fixed-window rate limiting

Main classes:
- TravelWorkflow: High-level interface for travel and landmark operations
- CoordinateResolver: Link/text to coordinates
- TravelMatrixCalculator: Target <-> landmark legs
- GoogleMapsClient: googlemaps SDK adapter implementing MapsProvider
- LinkExpander: Short-link redirect follower
- TimeBoundedCache / FixedWindowRateLimiter: Shared infrastructure

Errors:
- ProviderError (GeocodingError, DistanceError): Provider failures
- RateLimitError: Request window exceeded
- LocationNotFoundError, NoLandmarksError: Caller-correctable failures
"""

from .geo_cache import TimeBoundedCache
from .geo_client import GoogleMapsClient, MapsProvider
from .geo_errors import (
    DistanceError,
    GeocodingError,
    LocationNotFoundError,
    NoLandmarksError,
    ProviderError,
    RateLimitError,
    TravelError,
)
from .geo_links import LinkExpander
from .geo_matrix import TravelMatrixCalculator
from .geo_parser import extract_embedded_coordinates, extract_search_candidates
from .geo_rate_limiter import FixedWindowRateLimiter
from .geo_resolver import CoordinateResolver
from .geo_types import (
    Coordinates,
    DistancePoint,
    Landmark,
    TravelLegResult,
    TravelMode,
    TravelReport,
)
from .geo_workflow import TravelWorkflow

__all__ = [
    # Main classes
    "TravelWorkflow",
    "CoordinateResolver",
    "TravelMatrixCalculator",
    "GoogleMapsClient",
    "MapsProvider",
    "LinkExpander",
    "TimeBoundedCache",
    "FixedWindowRateLimiter",

    # Parsing
    "extract_embedded_coordinates",
    "extract_search_candidates",

    # Types
    "Coordinates",
    "DistancePoint",
    "Landmark",
    "TravelLegResult",
    "TravelMode",
    "TravelReport",

    # Errors
    "TravelError",
    "ProviderError",
    "GeocodingError",
    "DistanceError",
    "RateLimitError",
    "LocationNotFoundError",
    "NoLandmarksError",
]
