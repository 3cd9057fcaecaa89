"""
Maps provider contract and its Google Maps implementation.

The resolver and matrix calculator depend only on MapsProvider. The
Google adapter wraps the googlemaps SDK and reports API-level statuses as
outcomes, while transport failures are raised as ProviderError.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import googlemaps
import requests

from ..config.config_module import ConfigError, get_config
from ..config.logger_module import log_debug, log_error, log_info
from .geo_errors import ProviderError
from .geo_types import (
    STATUS_OK,
    STATUS_ZERO_RESULTS,
    Coordinates,
    DistanceOutcome,
    GeocodeOutcome,
    TravelMode,
)


class MapsProvider(ABC):
    """Geocoding and distance capabilities the core relies on."""

    @abstractmethod
    def geocode(self, text: str) -> GeocodeOutcome:
        """Look up free text; OK carries coordinates, ZERO_RESULTS means no match."""

    @abstractmethod
    def distance(self,
                 origin: Coordinates,
                 destination: Coordinates,
                 mode: TravelMode) -> DistanceOutcome:
        """Measure one directed leg departing now."""


def _value(element: Dict[str, Any], field: str) -> Optional[float]:
    value = (element.get(field) or {}).get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _raise_for_server_error(response: requests.Response, *args, **kwargs) -> None:
    """Response hook that fails 5xx replies before the SDK can retry them."""
    if response.status_code >= 500:
        raise requests.exceptions.HTTPError(
            f"{response.status_code} Server Error for url: {response.url}",
            response=response
        )


class GoogleMapsClient(MapsProvider):
    """
    Wraps the googlemaps SDK for geocoding and Distance Matrix lookups.

    Automatic retries are disabled: a failed call surfaces immediately and
    the caller decides whether to try again. The SDK retries 5xx replies on
    its own, so its session carries a hook that raises on the first one.
    """

    def __init__(self,
                 api_key: str = None,
                 request_timeout: float = 15.0):
        """
        Initialize the Google Maps client.

        Args:
            api_key: Google Maps API key (read from GOOGLE_MAPS_API_KEY if not provided)
            request_timeout: Per-request timeout in seconds

        Raises:
            ConfigError: If no API key is available
        """
        self.api_key = api_key or get_config("GOOGLE_MAPS_API_KEY")
        if not self.api_key:
            raise ConfigError("GOOGLE_MAPS_API_KEY is not configured.")

        self.request_timeout = request_timeout

        self._session = requests.Session()
        self._session.hooks["response"].append(_raise_for_server_error)

        self._gmaps = googlemaps.Client(
            key=self.api_key,
            timeout=request_timeout,
            retry_timeout=request_timeout,
            retry_over_query_limit=False,
            requests_session=self._session
        )

        log_info(f"GoogleMapsClient initialized (timeout={request_timeout}s)")

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._session.close()

    def _transport_error(self, action: str, error: Exception) -> ProviderError:
        base = getattr(error, "base_exception", None)
        if isinstance(error, googlemaps.exceptions.HTTPError):
            message = f"Google API request failed with HTTP {error.status_code}."
        elif isinstance(base, requests.exceptions.HTTPError) and base.response is not None:
            message = f"Google API request failed with HTTP {base.response.status_code}."
        elif isinstance(error, googlemaps.exceptions.Timeout):
            message = f"Google API request timed out after {self.request_timeout}s."
        else:
            message = f"Google API request failed: {error}"
        log_error(f"{action}: {message}")
        return ProviderError(message)

    def geocode(self, text: str) -> GeocodeOutcome:
        """
        Geocode free text.

        Args:
            text: Place name, address or other search string

        Returns:
            GeocodeOutcome with status OK and coordinates, ZERO_RESULTS,
            or the API's error status and message

        Raises:
            ProviderError: On HTTP errors, timeouts or connection failures
        """
        log_debug(f"Geocoding '{text}'")

        try:
            results = self._gmaps.geocode(address=text)
        except googlemaps.exceptions.ApiError as e:
            log_error(f"Geocoding API error for '{text}': {e.status} {e.message or ''}")
            return GeocodeOutcome(status=e.status, error_message=e.message)
        except (googlemaps.exceptions.HTTPError,
                googlemaps.exceptions.Timeout,
                googlemaps.exceptions.TransportError) as e:
            raise self._transport_error(f"Geocoding '{text}'", e)

        if not results:
            return GeocodeOutcome(status=STATUS_ZERO_RESULTS)

        location = (results[0].get("geometry") or {}).get("location") or {}
        coords = Coordinates.parse(location.get("lat"), location.get("lng"))

        log_info(f"Geocoded '{text}' to {coords.cache_key() if coords else 'nothing usable'}")
        return GeocodeOutcome(status=STATUS_OK, coordinates=coords)

    def distance(self,
                 origin: Coordinates,
                 destination: Coordinates,
                 mode: TravelMode) -> DistanceOutcome:
        """
        Look up distance and duration for one directed leg, departing now.

        Args:
            origin: Start point
            destination: End point
            mode: Travel mode; driving also requests the best_guess traffic model

        Returns:
            DistanceOutcome mirroring the first Distance Matrix element

        Raises:
            ProviderError: On HTTP errors, timeouts or connection failures
        """
        mode = TravelMode.coerce(mode)
        leg = f"{origin.cache_key()} -> {destination.cache_key()} ({mode.value})"
        log_debug(f"Distance lookup {leg}")

        try:
            payload = self._gmaps.distance_matrix(
                origins=[(origin.lat, origin.lng)],
                destinations=[(destination.lat, destination.lng)],
                mode=mode.value,
                departure_time="now",
                traffic_model="best_guess" if mode is TravelMode.DRIVING else None
            )
        except googlemaps.exceptions.ApiError as e:
            log_error(f"Distance Matrix API error for {leg}: {e.status} {e.message or ''}")
            return DistanceOutcome(status=e.status, error_message=e.message)
        except (googlemaps.exceptions.HTTPError,
                googlemaps.exceptions.Timeout,
                googlemaps.exceptions.TransportError) as e:
            raise self._transport_error(f"Distance lookup {leg}", e)

        status = payload.get("status", STATUS_OK)
        rows = payload.get("rows") or []
        elements = (rows[0].get("elements") or []) if rows else []
        if not elements:
            return DistanceOutcome(status=status, error_message=payload.get("error_message"))

        element = elements[0]
        return DistanceOutcome(
            status=status,
            element_status=element.get("status"),
            distance_meters=_value(element, "distance"),
            duration_seconds=_value(element, "duration"),
            duration_in_traffic_seconds=_value(element, "duration_in_traffic"),
            error_message=payload.get("error_message")
        )
