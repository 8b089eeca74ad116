"""
Plain data holders for subscriber settings, Amber price readings and alerts.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional

DEFAULT_QUIET_HOURS_START = "22:00"
DEFAULT_QUIET_HOURS_END = "07:00"


class AlertKind(str, Enum):
    HIGH_PRICE = "high_price"
    LOW_PRICE = "low_price"
    RENEWABLE = "renewable"


def _as_float(value, default=0.0):
    if value is None or value == "":
        return default
    return float(value)


@dataclass
class UserSettings:
    """One row of the `settings` table."""

    notification_email: str
    user_first_name: str = ""
    amber_api_token: Optional[str] = None
    amber_site_id: Optional[str] = None
    high_price_threshold: float = 0.0
    low_price_threshold: float = 0.0
    renewable_threshold: float = 0.0
    notifications_enabled: bool = True
    quiet_hours_enabled: bool = False
    quiet_hours_start: str = DEFAULT_QUIET_HOURS_START
    quiet_hours_end: str = DEFAULT_QUIET_HOURS_END
    active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        """
        Builds settings from a Supabase row dict.
        Missing or null optional columns fall back to the form defaults.
        """
        return cls(
            notification_email=row["notification_email"],
            user_first_name=row.get("user_first_name") or "",
            amber_api_token=row.get("amber_api_token") or None,
            amber_site_id=row.get("amber_site_id") or None,
            high_price_threshold=_as_float(row.get("high_price_threshold")),
            low_price_threshold=_as_float(row.get("low_price_threshold")),
            renewable_threshold=_as_float(row.get("renewable_threshold")),
            notifications_enabled=bool(row.get("notifications_enabled", True)),
            quiet_hours_enabled=bool(row.get("quiet_hours_enabled", False)),
            quiet_hours_start=row.get("quiet_hours_start") or DEFAULT_QUIET_HOURS_START,
            quiet_hours_end=row.get("quiet_hours_end") or DEFAULT_QUIET_HOURS_END,
            active=bool(row.get("active", True)),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_row(self):
        """
        Row payload for a form upsert. Audit columns are left to the caller and
        the `active` lifecycle flag is never written from the form.
        """
        row = asdict(self)
        for column in ("active", "created_at", "updated_at"):
            row.pop(column)
        return row


@dataclass
class PriceSample:
    """Current reading of the general channel for one site."""

    price: float
    renewables: float
    spot_per_kwh: Optional[float] = None
    spike_status: Optional[str] = None
    channel_type: str = "general"


@dataclass
class Alert:
    kind: AlertKind
    value: float
    threshold: float


@dataclass
class SweepResult:
    """Outcome counters for one sweep across all eligible users."""

    users: int = 0
    quiet: int = 0
    misconfigured: int = 0
    failed: int = 0
    evaluated: int = 0
    alerts_sent: int = 0
    alerts_failed: int = 0
    failed_users: list = field(default_factory=list)
