"""
Amber Electric API client.
Resolves a site id from an API token and reads the current general-channel price.
"""
from typing import List, Optional

import httpx

from amber_alerts.config import AMBER_API_BASE_URL, AMBER_API_TIMEOUT
from amber_alerts.exceptions import PricingAPIError
from amber_alerts.models import PriceSample

GENERAL_CHANNEL = "general"


class AmberClient:
    """Thin wrapper over the Amber REST API using a caller-owned httpx client."""

    def __init__(self, http_client: httpx.Client, base_url: str = AMBER_API_BASE_URL):
        self.http = http_client
        self.base_url = base_url.rstrip("/")

    def list_sites(self, api_token: str) -> List[dict]:
        """Return the sites visible to the token."""
        response = self._get("/sites", api_token)
        if not response.is_success:
            raise PricingAPIError("Failed to fetch sites. Please check your API token.")
        sites = self._json(response)
        if not isinstance(sites, list):
            raise PricingAPIError("Unexpected response format from Amber /sites")
        return sites

    def resolve_site_id(self, api_token: str) -> str:
        """Return the id of the first site for the token."""
        sites = self.list_sites(api_token)
        if not sites:
            raise PricingAPIError("No sites found for this API token.")
        site_id = sites[0].get("id")
        if not site_id:
            raise PricingAPIError("No sites found for this API token.")
        return site_id

    def get_current_price(self, api_token: str, site_id: str) -> PriceSample:
        """
        Fetch the current price reading for a site.

        Raises:
            PricingAPIError: on a non-success response, unreadable body or
                when no general channel is present.
        """
        response = self._get(f"/sites/{site_id}/prices/current", api_token)
        if not response.is_success:
            raise PricingAPIError(
                f"Failed to fetch Amber data: {response.status_code} {response.reason_phrase}"
            )
        readings = self._json(response)
        general = self._general_channel(readings)
        if general is None:
            raise PricingAPIError("No general channel price found")
        try:
            return PriceSample(
                price=float(general["perKwh"]),
                renewables=float(general["renewables"]),
                spot_per_kwh=_optional_float(general.get("spotPerKwh")),
                spike_status=general.get("spikeStatus"),
                channel_type=GENERAL_CHANNEL,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PricingAPIError(f"Malformed general channel reading: {e}") from e

    def _get(self, path: str, api_token: str) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
        }
        try:
            return self.http.get(f"{self.base_url}{path}", headers=headers)
        except httpx.HTTPError as e:
            raise PricingAPIError(f"HTTP error: {e}") from e

    @staticmethod
    def _json(response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise PricingAPIError(f"Invalid JSON from Amber API: {e}") from e

    @staticmethod
    def _general_channel(readings) -> Optional[dict]:
        if not isinstance(readings, list):
            return None
        for reading in readings:
            if isinstance(reading, dict) and reading.get("channelType") == GENERAL_CHANNEL:
                return reading
        return None


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


def create_http_client(timeout: float = AMBER_API_TIMEOUT) -> httpx.Client:
    return httpx.Client(timeout=timeout)
