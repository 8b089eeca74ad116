"""
Tests for the Amber API client using an httpx mock transport.
"""

import httpx
import pytest

from amber_alerts.exceptions import PricingAPIError
from conftest import amber_reading

PRICES_PATH = "/v1/sites/site-1/prices/current"


class TestGetCurrentPrice:

    def test_reads_general_channel(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(200, json=[
            amber_reading("feedIn", per_kwh=-8.0, renewables=41.0),
            amber_reading("general", per_kwh=27.5, renewables=41.0, spike_status="potential"),
        ])

        sample = amber_client.get_current_price("token-123", "site-1")

        assert sample.price == 27.5
        assert sample.renewables == 41.0
        assert sample.spike_status == "potential"
        assert sample.channel_type == "general"

    def test_sends_bearer_token(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(200, json=[amber_reading()])

        amber_client.get_current_price("token-123", "site-1")

        request = amber_transport.requests[0]
        assert request.headers["Authorization"] == "Bearer token-123"
        assert str(request.url) == "https://api.amber.com.au/v1/sites/site-1/prices/current"

    def test_error_status(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(401, json={"message": "unauthorized"})

        with pytest.raises(PricingAPIError, match="Failed to fetch Amber data: 401"):
            amber_client.get_current_price("bad-token", "site-1")

    def test_redirect_status(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(302, headers={"Location": "https://app.amber.com.au/login"})

        with pytest.raises(PricingAPIError, match="Failed to fetch Amber data: 302"):
            amber_client.get_current_price("token-123", "site-1")

    def test_missing_general_channel(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(200, json=[amber_reading("controlledLoad")])

        with pytest.raises(PricingAPIError, match="No general channel price found"):
            amber_client.get_current_price("token-123", "site-1")

    def test_non_list_payload(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(200, json={"unexpected": True})

        with pytest.raises(PricingAPIError, match="No general channel price found"):
            amber_client.get_current_price("token-123", "site-1")

    def test_invalid_json(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(PricingAPIError, match="Invalid JSON"):
            amber_client.get_current_price("token-123", "site-1")

    def test_missing_price_field(self, amber_client, amber_transport):
        reading = amber_reading()
        del reading["perKwh"]
        amber_transport.responses[PRICES_PATH] = httpx.Response(200, json=[reading])

        with pytest.raises(PricingAPIError, match="Malformed"):
            amber_client.get_current_price("token-123", "site-1")

    def test_transport_error(self, amber_client, amber_transport):
        amber_transport.responses[PRICES_PATH] = httpx.ConnectError("connection refused")

        with pytest.raises(PricingAPIError, match="HTTP error"):
            amber_client.get_current_price("token-123", "site-1")


class TestResolveSiteId:

    def test_uses_first_site(self, amber_client, amber_transport):
        amber_transport.responses["/v1/sites"] = httpx.Response(200, json=[
            {"id": "01ABC", "nmi": "1234567890", "status": "active"},
            {"id": "02DEF", "nmi": "0987654321", "status": "closed"},
        ])

        assert amber_client.resolve_site_id("token-123") == "01ABC"
        assert amber_transport.requests[0].headers["Accept"] == "application/json"

    def test_rejected_token(self, amber_client, amber_transport):
        amber_transport.responses["/v1/sites"] = httpx.Response(403, json={"message": "forbidden"})

        with pytest.raises(PricingAPIError, match="Please check your API token"):
            amber_client.resolve_site_id("bad-token")

    def test_redirected_token_check(self, amber_client, amber_transport):
        amber_transport.responses["/v1/sites"] = httpx.Response(302, headers={"Location": "https://app.amber.com.au/login"})

        with pytest.raises(PricingAPIError, match="Please check your API token"):
            amber_client.resolve_site_id("token-123")

    def test_no_sites(self, amber_client, amber_transport):
        amber_transport.responses["/v1/sites"] = httpx.Response(200, json=[])

        with pytest.raises(PricingAPIError, match="No sites found for this API token."):
            amber_client.resolve_site_id("token-123")
