# amber_alerts/ui/forms.py

import re
from datetime import time

import streamlit as st
from amber_alerts.models import UserSettings

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PRICE_SLIDER_MAX = 200
RENEWABLE_SLIDER_MAX = 100


def _to_time(value):
    hours, minutes = value.split(":")[:2]
    return time(int(hours), int(minutes))


def _slider_value(value, upper):
    return min(max(int(round(value)), 0), upper)


def validate_settings(settings):
    """
    Returns a list of user-facing error messages; empty when the settings can be saved.
    """
    errors = []
    if not EMAIL_PATTERN.match(settings.notification_email or ""):
        errors.append("Please enter a valid email address.")
    if not (settings.user_first_name or "").strip():
        errors.append("First name cannot be empty.")
    if not (settings.amber_api_token or "").strip():
        errors.append("Amber API token cannot be empty.")
    return errors


def settings_input_form(current, key_suffix=""):
    """
    Renders the settings form prefilled from `current`.
    Returns the submitted UserSettings, or None until the form is submitted.
    """
    with st.form(f"settings_form{key_suffix}"):
        first_name = st.text_input("First Name", value=current.user_first_name, placeholder="John",
                                   help="Your first name for personalized notifications")
        email = st.text_input("Email", value=current.notification_email, placeholder="john@example.com",
                              help="Where you'll receive notifications")
        token = st.text_input("Amber API Token", value=current.amber_api_token or "", type="password",
                              help="Your Amber API token from the developers page")
        st.text_input("Amber Site ID", value=current.amber_site_id or "", disabled=True,
                      placeholder="Save settings to generate",
                      help="Your Amber site ID - automatically fetched when you save settings")

        high = st.slider("High Price Threshold (¢/kWh)", min_value=0, max_value=PRICE_SLIDER_MAX,
                         value=_slider_value(current.high_price_threshold, PRICE_SLIDER_MAX), step=1,
                         help="Get notified when price exceeds this value")
        low = st.slider("Low Price Threshold (¢/kWh)", min_value=0, max_value=PRICE_SLIDER_MAX,
                        value=_slider_value(current.low_price_threshold, PRICE_SLIDER_MAX), step=1,
                        help="Get notified when price falls below this value")
        renewable = st.slider("Renewable Threshold (%)", min_value=0, max_value=RENEWABLE_SLIDER_MAX,
                              value=_slider_value(current.renewable_threshold, RENEWABLE_SLIDER_MAX), step=1,
                              help="Get notified when renewable percentage exceeds this value")

        notifications_enabled = st.toggle("Notifications", value=current.notifications_enabled,
                                          help="Enable or disable all notifications")
        quiet_hours_enabled = st.toggle("Quiet Hours", value=current.quiet_hours_enabled,
                                        help="No notifications during quiet hours")
        st.caption("The quiet window below only applies while Quiet Hours is switched on.")
        col_start, col_end = st.columns(2)
        with col_start:
            quiet_start = st.time_input("Start Time", value=_to_time(current.quiet_hours_start), step=300)
        with col_end:
            quiet_end = st.time_input("End Time", value=_to_time(current.quiet_hours_end), step=300)

        submitted = st.form_submit_button("Save Settings", use_container_width=True)

    if not submitted:
        return None

    return UserSettings(
        notification_email=email.strip(),
        user_first_name=first_name.strip(),
        amber_api_token=token.strip(),
        amber_site_id=current.amber_site_id,
        high_price_threshold=float(high),
        low_price_threshold=float(low),
        renewable_threshold=float(renewable),
        notifications_enabled=notifications_enabled,
        quiet_hours_enabled=quiet_hours_enabled,
        quiet_hours_start=quiet_start.strftime("%H:%M"),
        quiet_hours_end=quiet_end.strftime("%H:%M"),
        active=current.active,
    )
