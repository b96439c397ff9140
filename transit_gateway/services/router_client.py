"""
Router Client

This service forwards routing requests to the external multimodal
trip-planning engine over HTTP and returns its JSON payloads.

Each gateway request results in exactly one engine call. Failures are
never retried; every failure is raised as a RouterFailure subclass.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from transit_gateway.core.config import settings
from transit_gateway.core.errors import (
    RouterNetworkError,
    RouterPayloadError,
    RouterStatusError,
    RouterTimeout,
)
from transit_gateway.schemas.geo import Location
from transit_gateway.schemas.health import ServiceHealth

logger = logging.getLogger(__name__)


class RouterClient:
    """
    Client for the routing engine's route and travel-time operations.

    The base URL is read once at construction and never changes, so a
    single instance is shared by all requests.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the client with the engine's base URL.

        Args:
            base_url: Engine base URL (defaults to settings.ROUTER_URL)
            timeout: Seconds to wait for the engine (defaults to settings.TIMEOUT_SECS)
        """
        self._base_url = (base_url or settings.ROUTER_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.TIMEOUT_SECS
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client for the routing engine.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self._client

    async def resolve_route(
        self,
        origin: Location,
        destination: Location,
        options: Dict[str, Any],
        departure_secs: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Ask the engine for an itinerary between two points.

        Args:
            origin: Starting point
            destination: End point
            options: Router-specific options, sent verbatim
            departure_secs: Departure time in seconds, engine clock convention

        Returns:
            The engine's route payload, unmodified

        Raises:
            RouterFailure: If the engine cannot be reached or its answer is unusable
        """
        body: Dict[str, Any] = {
            "origin": origin.model_dump(by_alias=True),
            "destination": destination.model_dump(by_alias=True),
            "options": dict(options),
        }
        if departure_secs is not None:
            body["departureSecs"] = departure_secs
        return await self._post(settings.ROUTER_ROUTE_PATH, body)

    async def compute_travel_times(
        self,
        origin: Location,
        options: Dict[str, Any],
        departure_secs: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Ask the engine for travel times from a point to every zone of the city.

        Returns:
            The engine's travel-time payload, unmodified

        Raises:
            RouterFailure: If the engine cannot be reached or its answer is unusable
        """
        body: Dict[str, Any] = {
            "origin": origin.model_dump(by_alias=True),
            "options": dict(options),
        }
        if departure_secs is not None:
            body["departureSecs"] = departure_secs
        return await self._post(settings.ROUTER_TRAVEL_TIMES_PATH, body)

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            client = self._get_client()
            response = await client.post(path, json=body)
        except httpx.TimeoutException as e:
            logger.error("Request to routing engine %s timed out", path)
            raise RouterTimeout("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error("Network error while contacting routing engine: %s", str(e))
            raise RouterNetworkError(f"Network error: {str(e)}") from e

        if not response.is_success:
            logger.error(
                "Routing engine returned status %s for %s", response.status_code, path
            )
            raise RouterStatusError(
                response.status_code,
                f"Routing engine returned status {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Routing engine returned a non-JSON body for %s", path)
            raise RouterPayloadError("Invalid response data: not JSON") from e

        if not isinstance(payload, dict):
            logger.error("Routing engine returned %s instead of an object", type(payload).__name__)
            raise RouterPayloadError("Invalid response data: not a JSON object")
        return payload

    async def health_check(self) -> ServiceHealth:
        """
        Perform a health check of the routing engine.

        Returns:
            ServiceHealth indicating the health status of the routing engine.
        """
        try:
            client = self._get_client()
            response = await client.get(settings.ROUTER_HEALTH_PATH, timeout=5.0)

            if response.status_code == 200:
                return ServiceHealth(healthy=True, message="Routing engine is responding")
            return ServiceHealth(
                healthy=False,
                message=f"Routing engine returned status code: {response.status_code}",
            )

        except httpx.TimeoutException:
            return ServiceHealth(healthy=False, message="Routing engine request timed out")
        except Exception as e:  # pylint: disable=broad-except
            return ServiceHealth(healthy=False, message=f"Routing engine check failed: {str(e)}")

    async def close(self):
        """
        Close the HTTP client and release its connections.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance for dependency injection
router_client = RouterClient()
