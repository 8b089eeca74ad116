"""
Shared fixtures for the price alert tests.
Provides in-memory fakes for the settings store, the email sender and the Amber API.
"""

from datetime import datetime

import httpx
import pytest
import pytz

from amber_alerts.amber import AmberClient
from amber_alerts.exceptions import NotificationError, SettingsStoreError
from amber_alerts.models import UserSettings

SYDNEY = pytz.timezone("Australia/Sydney")


def amber_reading(channel_type="general", per_kwh=25.0, renewables=40.0, spike_status="none"):
    """Build one entry of the /prices/current payload."""
    return {
        "type": "CurrentInterval",
        "duration": 30,
        "spotPerKwh": per_kwh * 0.6,
        "perKwh": per_kwh,
        "renewables": renewables,
        "channelType": channel_type,
        "spikeStatus": spike_status,
    }


class FakeStore:
    """Settings store that serves a fixed list of users."""

    def __init__(self, users=None, error=None):
        self.users = users or []
        self.error = error
        self.upserts = []

    def fetch_eligible_users(self):
        if self.error:
            raise SettingsStoreError(self.error)
        return list(self.users)

    def get_settings(self, email):
        for user in self.users:
            if user.notification_email == email:
                return user
        return None

    def upsert_settings(self, settings, updated_at):
        self.upserts.append((settings, updated_at))
        return [settings.to_row()]


class RecordingSender:
    """Email sender that records every call and can fail for chosen alert kinds."""

    def __init__(self, fail_kinds=()):
        self.sent = []
        self.fail_kinds = set(fail_kinds)

    def send(self, user, alert):
        if alert.kind in self.fail_kinds:
            raise NotificationError(f"boom: {alert.kind.value}")
        self.sent.append((user.notification_email, alert.kind, alert.value, alert.threshold))


class FakeAmber:
    """Pricing gateway that returns a sample per site id, or raises a given error."""

    def __init__(self, samples=None, errors=None):
        self.samples = samples or {}
        self.errors = errors or {}
        self.calls = []

    def get_current_price(self, api_token, site_id):
        self.calls.append((api_token, site_id))
        if site_id in self.errors:
            raise self.errors[site_id]
        return self.samples[site_id]

    def resolve_site_id(self, api_token):
        if api_token in self.errors:
            raise self.errors[api_token]
        return f"site-for-{api_token}"


@pytest.fixture
def make_user():
    """
    Factory for subscriber settings with thresholds high=30, low=10, renewable=50.
    """
    def _make_user(email="jane@example.com", **overrides):
        values = dict(
            notification_email=email,
            user_first_name="Jane",
            amber_api_token="token-123",
            amber_site_id="site-1",
            high_price_threshold=30.0,
            low_price_threshold=10.0,
            renewable_threshold=50.0,
            notifications_enabled=True,
            quiet_hours_enabled=False,
            quiet_hours_start="22:00",
            quiet_hours_end="07:00",
            active=True,
        )
        values.update(overrides)
        return UserSettings(**values)
    return _make_user


@pytest.fixture
def midday():
    """A Sydney local time outside the default 22:00-07:00 quiet window."""
    return SYDNEY.localize(datetime(2024, 11, 20, 12, 0))


@pytest.fixture
def late_night():
    """A Sydney local time inside the default 22:00-07:00 quiet window."""
    return SYDNEY.localize(datetime(2024, 11, 20, 23, 30))


@pytest.fixture
def amber_transport():
    """
    Create a mock transport whose responses are configured per URL path.
    Unconfigured paths return 404.
    """
    class Routes:
        def __init__(self):
            self.responses = {}
            self.requests = []

        def handler(self, request):
            self.requests.append(request)
            response = self.responses.get(request.url.path)
            if response is None:
                return httpx.Response(404, json={"message": "not found"})
            if isinstance(response, Exception):
                raise response
            return response

    return Routes()


@pytest.fixture
def amber_client(amber_transport):
    http_client = httpx.Client(transport=httpx.MockTransport(amber_transport.handler))
    yield AmberClient(http_client, base_url="https://api.amber.com.au/v1")
    http_client.close()
