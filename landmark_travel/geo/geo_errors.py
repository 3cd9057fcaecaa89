"""
Exceptions for location resolution and travel calculation.

Not-found is not an error at the resolver level (it returns None); these
exceptions cover provider malfunctions, quota denials and the workflow's
caller-correctable failures.
"""


class TravelError(Exception):
    """Base class for all errors raised by the geo package."""
    pass


class ProviderError(TravelError):
    """Raised when the maps provider misbehaves or cannot be reached."""
    pass


class GeocodingError(ProviderError):
    """Raised when the geocode API returns a hard error status."""
    pass


class DistanceError(ProviderError):
    """Raised when a distance lookup fails or returns unusable data."""
    pass


class RateLimitError(TravelError):
    """Raised when a caller exceeds its request window."""
    pass


class LocationNotFoundError(TravelError):
    """Raised when no coordinates could be recovered from a reference."""
    pass


class NoLandmarksError(TravelError):
    """Raised when a travel calculation is requested without landmarks."""
    pass
