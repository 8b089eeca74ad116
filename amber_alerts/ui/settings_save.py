# amber_alerts/ui/settings_save.py

from dataclasses import replace
from datetime import datetime, timezone

import streamlit as st
from amber_alerts.exceptions import AmberAlertsError
from amber_alerts.logging import log_event
from amber_alerts.models import UserSettings
from amber_alerts.ui.forms import settings_input_form, validate_settings


def save_settings(settings, store, amber, now=None):
    """
    Resolves the Amber site id from the token, then upserts the row keyed on notification_email.
    Returns the saved settings including the resolved site id.
    """
    site_id = amber.resolve_site_id(settings.amber_api_token)
    saved = replace(settings, amber_site_id=site_id)
    if now is None:
        now = datetime.now(timezone.utc)
    store.upsert_settings(saved, updated_at=now.isoformat())
    log_event("INFO", "Settings saved", email=saved.notification_email, site_id=site_id)
    return saved


def load_settings_section(store):
    """
    Lets a returning user load their saved settings by email.
    The loaded row is kept in session state and prefills the form.
    """
    with st.expander("Load saved settings", expanded=False):
        email = st.text_input("Email used for notifications", value=st.session_state.get("user_email", ""))
        if st.button("Load"):
            try:
                loaded = store.get_settings(email.strip())
            except AmberAlertsError as e:
                log_event("ERROR", "Error loading user data", email=email, error=str(e))
                st.error("Could not load your settings. Please try again.")
                return
            if loaded is None:
                st.warning(f"No settings found for {email}.")
                return
            st.session_state["user_email"] = loaded.notification_email
            st.session_state["current_settings"] = loaded
            st.session_state["form_version"] = st.session_state.get("form_version", 0) + 1
            st.rerun()


def save_settings_section(store, amber):
    current = st.session_state.get("current_settings") or UserSettings(notification_email="")
    submitted = settings_input_form(current, key_suffix=str(st.session_state.get("form_version", 0)))
    if submitted is None:
        return

    errors = validate_settings(submitted)
    if errors:
        for error in errors:
            st.warning(error)
        return

    with st.spinner("Saving..."):
        try:
            saved = save_settings(submitted, store, amber)
        except AmberAlertsError as e:
            log_event("ERROR", "Error updating settings", email=submitted.notification_email, error=str(e))
            st.error(str(e) or "Failed to save settings. Please try again.")
            return

    st.session_state["user_email"] = saved.notification_email
    st.session_state["current_settings"] = saved
    st.session_state["form_version"] = st.session_state.get("form_version", 0) + 1
    st.success("✅ Settings Saved. Your preferences have been updated successfully.")
    st.info(f"Amber site ID: {saved.amber_site_id}")
