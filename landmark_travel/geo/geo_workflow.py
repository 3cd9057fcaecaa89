"""
High-level workflow wiring resolution, travel matrix and rate limiting.

TravelWorkflow owns the process-wide caches and rate limit buckets, so a
service should build one instance and share it across requests.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..config.config_module import TravelSettings
from ..config.logger_module import log_error, log_info
from .geo_cache import TimeBoundedCache
from .geo_client import GoogleMapsClient, MapsProvider
from .geo_errors import LocationNotFoundError, NoLandmarksError, RateLimitError
from .geo_links import LinkExpander
from .geo_matrix import TravelMatrixCalculator
from .geo_rate_limiter import FixedWindowRateLimiter
from .geo_resolver import CoordinateResolver
from .geo_types import Coordinates, Landmark, TravelMode, TravelReport


class TravelWorkflow:
    """
    Entry point for the two user-facing operations: measuring a target
    against the landmarks and locating a new landmark from its link.
    """

    def __init__(self,
                 maps_client: MapsProvider = None,
                 settings: TravelSettings = None,
                 rate_limiter: FixedWindowRateLimiter = None,
                 link_expander: LinkExpander = None):
        """
        Initialize the workflow.

        Args:
            maps_client: Maps provider (GoogleMapsClient built from settings if omitted)
            settings: Tunables (read from the environment if omitted)
            rate_limiter: Limiter shared by both operations
            link_expander: Short-link expander
        """
        self.settings = settings or TravelSettings.from_env()
        self._owned = []
        self.client = maps_client or GoogleMapsClient(
            api_key=self.settings.google_maps_api_key or None,
            request_timeout=self.settings.provider_timeout
        )
        if maps_client is None:
            self._owned.append(self.client)
        self.rate_limiter = rate_limiter or FixedWindowRateLimiter()

        self.link_expander = link_expander or LinkExpander(
            cache=TimeBoundedCache(self.settings.short_link_cache_ttl, name="short-links"),
            timeout=self.settings.link_expand_timeout
        )
        if link_expander is None:
            self._owned.append(self.link_expander)
        self.resolver = CoordinateResolver(
            provider=self.client,
            link_expander=self.link_expander,
            geocode_cache=TimeBoundedCache(self.settings.geocode_cache_ttl, name="geocode")
        )
        self.calculator = TravelMatrixCalculator(
            provider=self.client,
            distance_cache=TimeBoundedCache(self.settings.distance_cache_ttl, name="distance"),
            max_workers=self.settings.matrix_max_workers
        )

        log_info("TravelWorkflow initialized")

    def close(self) -> None:
        """Close the HTTP sessions of the clients this workflow built."""
        for resource in self._owned:
            resource.close()
        self._owned = []

    def calculate(self,
                  target_input: str,
                  landmarks: Sequence[Landmark],
                  mode: str = "driving",
                  client_id: str = "unknown") -> TravelReport:
        """
        Measure travel between a target reference and every landmark.

        Args:
            target_input: Map link or place text for the target
            landmarks: Stored landmarks to measure against
            mode: driving, walking or transit
            client_id: Caller identity used for rate limiting

        Returns:
            TravelReport with one row per landmark

        Raises:
            RateLimitError: Caller exceeded its travel window
            ValueError: Empty target or unsupported mode
            LocationNotFoundError: Target could not be resolved
            NoLandmarksError: No landmarks to measure against
            ProviderError: Geocoder malfunction while resolving the target
        """
        if not self.rate_limiter.allow(
            f"travel:{client_id}",
            self.settings.travel_rate_limit_max,
            self.settings.travel_rate_limit_window
        ):
            raise RateLimitError("Rate limit exceeded. Please wait a few minutes before recalculating.")

        travel_mode = TravelMode.coerce(mode)
        if not target_input or not target_input.strip():
            raise ValueError("Target location link is required.")

        target = self.resolver.resolve(target_input)
        if target is None:
            log_error(f"Could not resolve target '{target_input.strip()}'")
            raise LocationNotFoundError("Could not resolve coordinates from this link.")

        if not landmarks:
            raise NoLandmarksError("No landmarks found. Add at least one landmark first.")

        results = self.calculator.compute_matrix(target, landmarks, travel_mode)
        failed = sum(1 for result in results if result.error_message)
        log_info(
            f"Travel matrix complete: {len(results) - failed} landmark(s) fully measured, "
            f"{failed} with errors"
        )

        return TravelReport(
            target=target,
            mode=travel_mode,
            generated_at=datetime.now(timezone.utc).isoformat(),
            results=results
        )

    def locate_landmark(self,
                        name: str,
                        maps_url: str,
                        lat: Optional[float] = None,
                        lng: Optional[float] = None,
                        client_id: str = "unknown") -> Landmark:
        """
        Build a Landmark, resolving its link unless coordinates are given.

        Args:
            name: Display name
            maps_url: Map link the landmark was added from
            lat: Explicit latitude (must be paired with lng)
            lng: Explicit longitude (must be paired with lat)
            client_id: Caller identity used for rate limiting

        Returns:
            Landmark with a fresh id

        Raises:
            RateLimitError: Caller exceeded its landmark window
            ValueError: Blank name or link, half a coordinate pair, or out-of-range values
            LocationNotFoundError: The link could not be resolved
        """
        if not self.rate_limiter.allow(
            f"landmarks:{client_id}",
            self.settings.landmark_rate_limit_max,
            self.settings.landmark_rate_limit_window
        ):
            raise RateLimitError("Rate limit exceeded. Please try again in a few minutes.")

        if not name or not name.strip():
            raise ValueError("Name is required.")
        if not maps_url or not maps_url.strip():
            raise ValueError("Maps URL is required.")
        if (lat is None) != (lng is None):
            raise ValueError("lat and lng must both be provided if one is set.")

        if lat is not None:
            coords = Coordinates(float(lat), float(lng))
        else:
            coords = self.resolver.resolve(maps_url)
            if coords is None:
                raise LocationNotFoundError("Could not resolve coordinates from this link.")

        landmark = Landmark(
            id=str(uuid.uuid4()),
            name=name.strip(),
            coordinates=coords,
            maps_url=maps_url.strip()
        )
        log_info(f"Located landmark '{landmark.name}' at {coords.cache_key()}")
        return landmark
