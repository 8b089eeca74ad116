"""
Domain exceptions for the Amber price alerts job.
"""


class AmberAlertsError(Exception):
    """Base exception for all price alert errors."""
    pass


class SettingsStoreError(AmberAlertsError):
    """Raised when the settings table cannot be read or written."""
    pass


class PricingAPIError(AmberAlertsError):
    """Raised when the Amber API call fails or returns unusable data."""
    pass


class NotificationError(AmberAlertsError):
    """Raised when an alert email could not be dispatched."""
    pass
