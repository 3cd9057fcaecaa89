"""
Bidirectional travel matrix between a target and a set of landmarks.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from ..config.logger_module import log_info, log_warning
from .geo_cache import TimeBoundedCache
from .geo_client import MapsProvider
from .geo_errors import DistanceError
from .geo_types import (
    STATUS_OK,
    Coordinates,
    DistancePoint,
    Landmark,
    TravelLegResult,
    TravelMode,
)


LEG_ERROR_SEPARATOR = " | "


class TravelMatrixCalculator:
    """
    Measures target -> landmark and landmark -> target for every landmark.

    All legs run concurrently on a thread pool and every leg is awaited,
    so one failing direction never hides the other's result.
    """

    def __init__(self,
                 provider: MapsProvider,
                 distance_cache: Optional[TimeBoundedCache] = None,
                 distance_ttl: float = 60.0,
                 max_workers: int = 8):
        """
        Initialize the calculator.

        Args:
            provider: Distance provider
            distance_cache: Cache of leg results keyed by endpoints and mode
            distance_ttl: Lifetime of a cached leg when no cache is given
            max_workers: Upper bound on concurrent provider calls
        """
        self.provider = provider
        self.distance_cache = (
            distance_cache if distance_cache is not None
            else TimeBoundedCache(distance_ttl, name="distance")
        )
        self.max_workers = max_workers

    @staticmethod
    def leg_cache_key(origin: Coordinates, destination: Coordinates, mode: TravelMode) -> str:
        return f"{origin.cache_key()}->{destination.cache_key()}:{mode.value}"

    def get_distance(self,
                     origin: Coordinates,
                     destination: Coordinates,
                     mode: TravelMode) -> DistancePoint:
        """
        Measure one directed leg, using the cache when possible.

        Raises:
            DistanceError: When the provider result is an error or incomplete
            ProviderError: When the provider cannot be reached
        """
        mode = TravelMode.coerce(mode)
        cache_key = self.leg_cache_key(origin, destination, mode)
        cached = self.distance_cache.get(cache_key)
        if cached is not None:
            return cached

        outcome = self.provider.distance(origin, destination, mode)

        if outcome.status != STATUS_OK:
            raise DistanceError(
                outcome.error_message or f"Distance Matrix failed with status {outcome.status}."
            )

        if outcome.element_status is None:
            raise DistanceError("Distance Matrix returned an empty response.")

        if outcome.element_status != STATUS_OK:
            raise DistanceError(f"Distance Matrix element failed with status {outcome.element_status}.")

        duration = outcome.duration_in_traffic_seconds
        if duration is None:
            duration = outcome.duration_seconds

        if outcome.distance_meters is None or duration is None:
            raise DistanceError("Distance Matrix response is missing distance or duration values.")

        point = DistancePoint.from_provider(outcome.distance_meters, duration)
        self.distance_cache.set(cache_key, point)
        return point

    @staticmethod
    def _settle(future: Future, direction: str, errors: List[str]) -> Optional[DistancePoint]:
        try:
            return future.result()
        except Exception as e:
            errors.append(f"{direction} failed: {e}")
            return None

    def compute_matrix(self,
                       target: Coordinates,
                       landmarks: Sequence[Landmark],
                       mode: TravelMode = TravelMode.DRIVING) -> List[TravelLegResult]:
        """
        Compute both legs for every landmark.

        Args:
            target: The point being evaluated
            landmarks: Landmarks to measure against
            mode: Travel mode for every leg

        Returns:
            One TravelLegResult per landmark, in input order
        """
        mode = TravelMode.coerce(mode)
        if not landmarks:
            return []

        log_info(f"Computing {mode.value} matrix for {target.cache_key()} against {len(landmarks)} landmark(s)")

        workers = max(1, min(self.max_workers, len(landmarks) * 2))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="travel-leg") as executor:
            pending: List[Tuple[Landmark, Future, Future]] = []
            for landmark in landmarks:
                outbound = executor.submit(self.get_distance, target, landmark.coordinates, mode)
                inbound = executor.submit(self.get_distance, landmark.coordinates, target, mode)
                pending.append((landmark, outbound, inbound))

            results = []
            for landmark, outbound, inbound in pending:
                errors: List[str] = []
                to_landmark = self._settle(outbound, "target -> landmark", errors)
                to_target = self._settle(inbound, "landmark -> target", errors)

                error_message = LEG_ERROR_SEPARATOR.join(errors) if errors else None
                if error_message:
                    log_warning(f"Landmark '{landmark.name}': {error_message}")

                results.append(TravelLegResult(
                    landmark_id=landmark.id,
                    landmark_name=landmark.name,
                    to_landmark=to_landmark,
                    to_target=to_target,
                    error_message=error_message
                ))

        return results
