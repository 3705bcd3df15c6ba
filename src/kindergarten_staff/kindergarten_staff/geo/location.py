from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional, Protocol

from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.exceptions import DomainError, LocationUnavailable
from .distance import Coordinate

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    def current_location(self) -> Coordinate:
        """Block until a reading is available. Raise on failure."""

        raise NotImplementedError


class ReportedLocationProvider:
    """Location reported by the client alongside the request."""

    def __init__(self, coordinate: Optional[Coordinate]):
        self._coordinate = coordinate

    def current_location(self) -> Coordinate:
        if self._coordinate is None:
            raise LocationUnavailable("The device did not report a location")
        return self._coordinate


def acquire_location(
    provider: Optional[LocationProvider],
    *,
    timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
) -> Coordinate:
    """Obtain a reading or fail explicitly with ``LocationUnavailable``."""
    if provider is None:
        raise LocationUnavailable("No location provider is available")

    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(provider.current_location)
    try:
        return future.result(timeout=timeout_seconds)
    except FutureTimeout:
        logger.warning("location reading timed out after %.1fs", timeout_seconds)
        raise LocationUnavailable(f"Location timed out after {timeout_seconds:g} seconds")
    except LocationUnavailable:
        raise
    except (DomainError, OSError, RuntimeError, ValueError) as exc:
        logger.warning("location provider failed: %s", exc)
        raise LocationUnavailable(f"Location could not be determined: {exc}") from exc
    finally:
        # a stuck provider must not hold the caller
        executor.shutdown(wait=False)
