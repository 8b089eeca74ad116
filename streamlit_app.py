"""
Streamlit web application where subscribers configure their Amber price alert thresholds.
"""
import streamlit as st

from amber_alerts.amber import AmberClient, create_http_client
from amber_alerts.db import SettingsStore, get_supabase_client
from amber_alerts.logging import log_event
from amber_alerts.ui.header import display_header
from amber_alerts.ui.footer import display_footer
from amber_alerts.ui.settings_save import load_settings_section, save_settings_section


@st.cache_resource
def get_store():
    return SettingsStore(get_supabase_client())


@st.cache_resource
def get_amber_client():
    return AmberClient(create_http_client())


def main():
    """
    Main function to run the Streamlit app.
    Handles UI rendering, loading saved settings and saving the form.
    """
    st.set_page_config(page_title="Amber Price Alerts", page_icon="⚡", layout="centered")

    display_header()

    st.markdown(
        "<p style='color:darkblue;'>Get an email when electricity prices rise above or fall below your thresholds, or when the grid is running on plenty of renewables.</p>",
        unsafe_allow_html=True
    )

    try:
        store = get_store()
    except Exception as e:
        log_event("ERROR", "Failed to connect to settings store", error=str(e))
        st.error("Settings are unavailable right now. Please try again later.")
        return

    load_settings_section(store)
    save_settings_section(store, get_amber_client())

    display_footer()

if __name__ == "__main__":
    main()
