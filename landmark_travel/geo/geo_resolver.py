"""
Coordinate resolution for free-form location references.

Literal coordinates recovered from a link always win since they are exact
and cost nothing. Only when none are found does the resolver fall back to
the geocoder, walking the search candidates from most to least specific.
"""

from typing import List, Optional

from ..config.logger_module import log_debug, log_error, log_info
from .geo_cache import TimeBoundedCache
from .geo_client import MapsProvider
from .geo_errors import GeocodingError
from .geo_links import LinkExpander
from .geo_parser import extract_search_candidates, find_embedded_coordinates
from .geo_types import STATUS_OK, STATUS_ZERO_RESULTS, Coordinates


class CoordinateResolver:
    """
    Turns a map link or place text into Coordinates.

    Not-found is reported as None. A geocoder malfunction raises
    GeocodingError and stops the candidate walk.
    """

    def __init__(self,
                 provider: MapsProvider,
                 link_expander: Optional[LinkExpander] = None,
                 geocode_cache: Optional[TimeBoundedCache] = None,
                 geocode_ttl: float = 24 * 60 * 60):
        """
        Initialize the resolver.

        Args:
            provider: Geocoding provider
            link_expander: Short-link expander (a default one is built if omitted)
            geocode_cache: Cache of successful lookups keyed by lower-cased text
            geocode_ttl: Lifetime of a cached lookup when no cache is given
        """
        self.provider = provider
        self.link_expander = link_expander or LinkExpander()
        self.geocode_cache = (
            geocode_cache if geocode_cache is not None
            else TimeBoundedCache(geocode_ttl, name="geocode")
        )

    def geocode_candidate(self, candidate: str) -> Optional[Coordinates]:
        """
        Geocode one search string through the cache.

        Returns:
            Coordinates, or None when the provider has no usable match

        Raises:
            GeocodingError: When the provider reports a hard error status
        """
        cache_key = candidate.lower()
        cached = self.geocode_cache.get(cache_key)
        if cached is not None:
            log_debug(f"Geocode cache hit for '{candidate}'")
            return cached

        outcome = self.provider.geocode(candidate)

        if outcome.status == STATUS_ZERO_RESULTS:
            return None

        if outcome.status != STATUS_OK:
            message = outcome.error_message or f"Geocoding failed with status {outcome.status}."
            log_error(f"Geocoding '{candidate}' failed: {message}")
            raise GeocodingError(message)

        if outcome.coordinates is None:
            return None

        self.geocode_cache.set(cache_key, outcome.coordinates)
        return outcome.coordinates

    def resolve(self, text: str) -> Optional[Coordinates]:
        """
        Resolve a location reference to coordinates.

        Args:
            text: Full or short map link, or plain place text

        Returns:
            Coordinates, or None when every candidate came up empty

        Raises:
            GeocodingError: When the geocoder malfunctions
            ProviderError: When the geocoder cannot be reached
        """
        trimmed = text.strip()
        expanded = self.link_expander.maybe_expand(trimmed)

        parse_candidates = [trimmed] if expanded == trimmed else [expanded, trimmed]

        for reference in parse_candidates:
            match = find_embedded_coordinates(reference)
            if match:
                log_info(f"Resolved '{trimmed}' from {match.source} to {match.coordinates.cache_key()}")
                return match.coordinates

        search_candidates: List[str] = []
        for reference in parse_candidates:
            for candidate in extract_search_candidates(reference):
                if candidate not in search_candidates:
                    search_candidates.append(candidate)

        for candidate in search_candidates:
            coords = self.geocode_candidate(candidate)
            if coords:
                log_info(f"Resolved '{trimmed}' by geocoding '{candidate}'")
                return coords

        log_info(f"No coordinates found for '{trimmed}' ({len(search_candidates)} candidate(s) tried)")
        return None
